"""
Checks for splitting sort keys, picking icons and rendering anchor attributes
outside of a request cycle.
"""
import os

import django
import pytest

# Set Django settings
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'columnsortable_site.settings')

# Setup Django
django.setup()

from columnsortable import ColumnSortableException, SortableLink


def test_explode_sort_parameter():
    """A plain column has no relation part, a dotted key has exactly one"""
    assert SortableLink.explode_sort_parameter('name') == []
    assert SortableLink.explode_sort_parameter('address.city') == ['address', 'city']

    for bad_key in ['a.b.c', 'profile.address.city.name']:
        with pytest.raises(ColumnSortableException):
            SortableLink.explode_sort_parameter(bad_key)


def test_parse_parameters():
    column, parameter, title, query, attributes = SortableLink.parse_parameters(
        'address.city', 'City', {'status': 'open'}, {'id': 'city-col'}
    )
    assert column == 'city'
    assert parameter == 'address.city'
    assert title == 'City'
    assert query == {'status': 'open'}
    assert attributes == {'id': 'city-col'}


def test_select_icon_uses_column_groups():
    assert SortableLink.select_icon('email') == 'fa fa-sort-alpha'
    assert SortableLink.select_icon('price') == 'fa fa-sort-amount'
    assert SortableLink.select_icon('created_at') == 'fa fa-sort-numeric'
    assert SortableLink.select_icon('nickname') == 'fa fa-sort'


def test_build_anchor_attributes_string():
    assert SortableLink.build_anchor_attributes_string({}) == ''
    assert SortableLink.build_anchor_attributes_string({'href': '/x/'}) == ''
    assert SortableLink.build_anchor_attributes_string(
        {'title': 'Sort "users"', 'hidden': ''}
    ) == ' title="Sort &quot;users&quot;" hidden'


def test_apply_formatting_defaults():
    assert SortableLink.apply_formatting(None, 'name') == 'Name'
    assert SortableLink.apply_formatting('full name', 'name') == 'Full name'
