"""
WSGI config for peek_console project.
"""

import os
from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'peek_console.settings')
application = get_wsgi_application()
