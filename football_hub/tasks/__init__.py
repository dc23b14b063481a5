"""Tasks Celery"""
