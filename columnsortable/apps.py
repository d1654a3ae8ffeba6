from django.apps import AppConfig


class ColumnsortableConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'columnsortable'
    verbose_name = 'Column sortable'
