from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_cors import CORS

# Singletons shared by models and frontend controllers (initialized in app factory)
db = SQLAlchemy()
migrate = Migrate()
cors = CORS()
