"""
Course Payments Backend - Django project configuration (settings, URLs, WSGI).
"""
