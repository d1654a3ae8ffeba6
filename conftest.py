import os

import django

# Set Django settings
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'columnsortable_site.settings')

# Setup Django
django.setup()
