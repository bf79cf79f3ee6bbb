# Overview: Flask extension instances for the state database.

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
