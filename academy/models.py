"""
Academy Application Models Registry

This module serves as the central models registry for the academy app.
It imports and exposes all models from the logical submodules (courses,
users) so that they are registered with Django's ORM under one app label.

Author: Course Payments Team
Version: 1.0.0
"""

# Course catalogue
from .courses.models import *

# Profiles and entitlements
from .users.models import *
