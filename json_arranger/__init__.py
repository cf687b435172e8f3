"""Core logic for JSON Arranger.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- classify document categories
- aggregate records sharing a `data` key
- filter, sort and project records into tables
- load, edit and export the document
"""
