import os

from dotenv import load_dotenv

# .env values fill in missing environment variables
load_dotenv()


def _csv(name: str, default: str) -> list[str]:
    return [v.strip() for v in os.getenv(name, default).split(",") if v.strip()]


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _delivery_options(raw: list[str]) -> dict[str, int]:
    # "code:price_cents" pairs, price defaults to 0
    options: dict[str, int] = {}
    for entry in raw:
        code, _, price = entry.partition(":")
        options[code.strip()] = int(price or 0)
    return options


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///shopfront.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Comma-separated list
    CORS_ORIGINS = _csv("CORS_ORIGINS", "")

    APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT = int(os.getenv("APP_PORT", "8080"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    TAX_RATE = float(os.getenv("TAX_RATE", "0.13"))

    # Checkout steps in pipeline order; also the sub-clients of the checkout page
    CHECKOUT_STANDARD_SUBPARTS = _csv("CHECKOUT_STANDARD_SUBPARTS", "address,delivery,payment,summary,process")
    # Steps merged into one page; the first entry replaces them in navigation
    CHECKOUT_STANDARD_ONEPAGE = _csv("CHECKOUT_STANDARD_ONEPAGE", "")
    # Step shown when no previous step requires attention
    CHECKOUT_STANDARD_STEP_ACTIVE = os.getenv("CHECKOUT_STANDARD_STEP_ACTIVE", "summary")
    # Raise instead of falling back to the first step on inconsistent step config
    CHECKOUT_STANDARD_STRICT_STEPS = _flag("CHECKOUT_STANDARD_STRICT_STEPS", "false")

    CHECKOUT_DELIVERY_OPTIONS = _delivery_options(_csv("CHECKOUT_DELIVERY_OPTIONS", "standard:0,express:1500"))
    CHECKOUT_PAYMENT_OPTIONS = _csv("CHECKOUT_PAYMENT_OPTIONS", "invoice,paypalexpress")

    CATALOG_SUGGEST_SIZE = int(os.getenv("CATALOG_SUGGEST_SIZE", "24"))
    CATALOG_SUGGEST_RESTRICT = _flag("CATALOG_SUGGEST_RESTRICT", "true")
    CATALOG_INSTOCK = _flag("CATALOG_INSTOCK", "false")
    CATALOG_CATID_DEFAULT = os.getenv("CATALOG_CATID_DEFAULT") or None

    ACCOUNT_REVIEW_SIZE = int(os.getenv("ACCOUNT_REVIEW_SIZE", "10"))
    ACCOUNT_REVIEW_DAYS_AFTER = int(os.getenv("ACCOUNT_REVIEW_DAYS_AFTER", "0"))

    BASKET_RELATED_BOUGHT_SIZE = int(os.getenv("BASKET_RELATED_BOUGHT_SIZE", "6"))


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
