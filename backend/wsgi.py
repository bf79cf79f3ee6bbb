# backend/wsgi.py
from stitchflow import create_app

app = create_app()
