from django.conf import settings

DEFAULTS = {
    # Icon class groups, picked by column name. The last matching group wins.
    'columns': {
        'alpha': {
            'rows': ['description', 'email', 'name', 'slug'],
            'class': 'fa fa-sort-alpha',
        },
        'amount': {
            'rows': ['amount', 'price'],
            'class': 'fa fa-sort-amount',
        },
        'numeric': {
            'rows': ['created_at', 'updated_at', 'level', 'id', 'phone_number'],
            'class': 'fa fa-sort-numeric',
        },
    },
    'enable_icons': True,
    'default_icon_set': 'fa fa-sort',
    'sortable_icon': 'fa fa-sort',
    'clickable_icon': False,
    'icon_text_separator': ' ',
    'asc_suffix': '-asc',
    'desc_suffix': '-desc',
    'anchor_class': None,
    'active_anchor_class': None,
    'direction_anchor_class_prefix': None,
    'uri_relation_column_separator': '.',
    'formatting_function': 'django.utils.text.capfirst',
    'format_custom_titles': True,
    'inject_title_as': None,
    'default_direction_unsorted': 'asc',
    'inert_class': 'sortable-inert',
}


def get_config(key, default=None):
    """Read one COLUMN_SORTABLE setting, falling back to the app defaults.

    Settings are looked up on every call so ``override_settings`` applies
    without a reload.
    """
    user_config = getattr(settings, 'COLUMN_SORTABLE', None) or {}
    if key in user_config:
        return user_config[key]
    return DEFAULTS.get(key, default)
