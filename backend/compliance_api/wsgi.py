"""
WSGI config for compliance_api project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "compliance_api.settings")

application = get_wsgi_application()
