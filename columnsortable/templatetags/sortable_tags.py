from django import template
from django.core.exceptions import ImproperlyConfigured

from columnsortable.sortable_link import SortableLink

register = template.Library()


def _check_request(request):
    if not hasattr(request, 'GET'):
        raise ImproperlyConfigured(
            "sortablelink and sort_direction need 'request' in the template context; enable "
            "'django.template.context_processors.request' in TEMPLATES."
        )
    return request


def _request_from(context):
    return _check_request(context.get('request'))


@register.simple_tag(takes_context=True)
def sortablelink(context, sort_key, title=None, query=None, attrs=None):
    """Render a sortable column header.

    Usage::

        {% load sortable_tags %}
        {% sortablelink 'name' %}
        {% sortablelink 'address.city' 'City' query=filters attrs=link_attrs %}
    """
    return SortableLink.render(_request_from(context), sort_key, title, query, attrs)


@register.filter
def sort_direction(request, sort_key):
    """Direction the next click on ``sort_key`` will request."""
    request = _check_request(request)
    sort_column, sort_key, _, _, _ = SortableLink.parse_parameters(sort_key)
    _, direction = SortableLink.determine_direction(request, sort_column, sort_key)
    return direction
