from __future__ import annotations

from shopfront.app.client import HtmlClient, View
from shopfront.frontend.basket import BasketController
from shopfront.modules.checkout.parts import AddressPart, DeliveryPart, PaymentPart, ProcessPart, SummaryPart
from shopfront.modules.checkout.steps import DEFAULT_STEPS, StepConfig, StepSequence, sequence_steps


class CheckoutStandard(HtmlClient):
    """Multi-step checkout page.

    The configured sub-clients are the checkout steps in pipeline order. Only
    the active step is rendered, together with the one-page steps if it is
    the first navigable one.
    """

    template_body = "checkout/standard/body.html"
    template_header = "checkout/standard/header.html"
    subparts_key = "CHECKOUT_STANDARD_SUBPARTS"
    subparts = DEFAULT_STEPS
    subpart_types = {
        "address": AddressPart,
        "delivery": DeliveryPart,
        "payment": PaymentPart,
        "summary": SummaryPart,
        "process": ProcessPart,
    }

    def data(self, view: View) -> View:
        context = self.context()
        view.standard_basket = BasketController(context).get()

        config = StepConfig.from_mapping(context.config)
        seq = sequence_steps(
            config,
            requested=view.param("c_step"),
            active=view.get("standard_step_active"),
            strict=context.config.get("CHECKOUT_STANDARD_STRICT_STEPS", False),
        )
        context.logger.debug("Checkout step %s (requested %s)", seq.active, view.param("c_step"))

        view.standard_steps = seq.steps
        view.standard_onepage = config.onepage
        view.standard_step_active = seq.active
        view.standard_steps_before = seq.before
        view.standard_steps_after = seq.after

        view = super().data(view)
        return self.navigation(view, seq)

    def navigation(self, view: View, seq: StepSequence) -> View:
        """Adds the "back" and "next" URLs to the view."""
        if seq.back is not None:
            view.standard_url_back = view.link("checkout.standard", c_step=seq.back)
        else:
            view.standard_url_back = view.link("basket.standard")

        # keep a next URL set by a step, e.g. the order URL of the summary
        if view.get("standard_url_next") is None and seq.next is not None:
            view.standard_url_next = view.link("checkout.standard", c_step=seq.next)

        return view
