import logging
from collections.abc import Mapping

from django.http import QueryDict
from django.utils.datastructures import MultiValueDict
from django.utils.html import conditional_escape, format_html
from django.utils.module_loading import import_string
from django.utils.safestring import mark_safe

from .conf import get_config
from .exceptions import ColumnSortableException

logger = logging.getLogger(__name__)

DIRECTIONS = ('asc', 'desc')
NON_PERSISTENT_PARAMETERS = ('sort', 'direction', 'page')


class SortableLink:
    """Renders a column header link that toggles ``sort`` and ``direction``.

    Every method is static; ``render`` is what templates and views call.
    """

    @staticmethod
    def render(request, sort_parameter, title=None, query_parameters=None, anchor_attributes=None):
        sort_column, sort_parameter, title, query_parameters, anchor_attributes = (
            SortableLink.parse_parameters(sort_parameter, title, query_parameters, anchor_attributes)
        )

        title = SortableLink.apply_formatting(title, sort_column)

        # not sortable, render plain text
        if not sort_column:
            return format_html('<span class="{}">{}</span>', get_config('inert_class'), title)

        inject_title_as = get_config('inject_title_as')
        if inject_title_as:
            query = request.GET.copy()
            query[inject_title_as] = str(title)
            request.GET = query

        icon, direction = SortableLink.determine_direction(request, sort_column, sort_parameter)
        logger.debug("Sortable link for '%s' points to direction '%s'", sort_parameter, direction)

        trailing_tag = SortableLink.form_trailing_tag(icon)
        anchor_class = SortableLink.get_anchor_class(request, sort_parameter, anchor_attributes)
        attributes = SortableLink.build_anchor_attributes_string(anchor_attributes)
        query_string = SortableLink.build_query_string(request, query_parameters, sort_parameter, direction)
        url = SortableLink.build_url(request, query_string, anchor_attributes)

        return mark_safe(
            '<a' + anchor_class + format_html(' href="{}"', url) + attributes + '>'
            + conditional_escape(title) + trailing_tag
        )

    @staticmethod
    def parse_parameters(sort_parameter, title=None, query_parameters=None, anchor_attributes=None):
        sort_parameter = '' if sort_parameter is None else str(sort_parameter)
        parts = SortableLink.explode_sort_parameter(sort_parameter)
        sort_column = parts[1] if parts else sort_parameter

        if not isinstance(query_parameters, Mapping):
            query_parameters = {}
        if isinstance(anchor_attributes, Mapping):
            anchor_attributes = dict(anchor_attributes)
        else:
            anchor_attributes = {}

        return sort_column, sort_parameter, title, query_parameters, anchor_attributes

    @staticmethod
    def explode_sort_parameter(parameter):
        """Split ``relation.column`` into ``[relation, column]``.

        Returns an empty list when the separator is absent.
        """
        separator = get_config('uri_relation_column_separator')
        if separator and separator in parameter:
            parts = parameter.split(separator)
            if len(parts) != 2:
                raise ColumnSortableException(parameter, separator)
            return parts
        return []

    @staticmethod
    def apply_formatting(title, sort_column):
        if hasattr(title, '__html__'):
            return title

        if title is None:
            title = sort_column
        elif not get_config('format_custom_titles'):
            return title

        formatter = get_config('formatting_function')
        if formatter is None:
            return title
        if isinstance(formatter, str):
            try:
                formatter = import_string(formatter)
            except ImportError:
                logger.warning("Formatting function '%s' could not be imported, title left as is", formatter)
                return title

        return formatter(title)

    @staticmethod
    def determine_direction(request, sort_column, sort_parameter):
        current_direction = request.GET.get('direction')

        if request.GET.get('sort') == sort_parameter and current_direction in DIRECTIONS:
            icon = SortableLink.select_icon(sort_column)
            if current_direction == 'asc':
                return icon + get_config('asc_suffix'), 'desc'
            return icon + get_config('desc_suffix'), 'asc'

        return get_config('sortable_icon'), get_config('default_direction_unsorted')

    @staticmethod
    def select_icon(sort_column):
        icon = get_config('default_icon_set')
        for group in (get_config('columns') or {}).values():
            if sort_column in group.get('rows', []):
                icon = group['class']
        return icon

    @staticmethod
    def form_trailing_tag(icon):
        if not get_config('enable_icons'):
            return '</a>'

        separator = get_config('icon_text_separator') or ''
        icon_tag = format_html('<i class="{}"></i>', icon)

        if get_config('clickable_icon'):
            return separator + icon_tag + '</a>'
        return '</a>' + separator + icon_tag

    @staticmethod
    def get_anchor_class(request, sort_parameter, anchor_attributes):
        """Collect the anchor's classes, consuming ``class`` from ``anchor_attributes``."""
        classes = []
        active = SortableLink.should_show_active(request, sort_parameter)

        anchor_class = get_config('anchor_class')
        if anchor_class is not None:
            classes.append(anchor_class)

        active_class = get_config('active_anchor_class')
        if active_class is not None and active:
            classes.append(active_class)

        prefix = get_config('direction_anchor_class_prefix')
        if prefix is not None and active:
            if request.GET.get('direction') == 'asc':
                classes.append(prefix + get_config('asc_suffix'))
            else:
                classes.append(prefix + get_config('desc_suffix'))

        if 'class' in anchor_attributes:
            classes.extend(str(anchor_attributes.pop('class')).split(' '))

        if not classes:
            return ''
        return format_html(' class="{}"', ' '.join(classes))

    @staticmethod
    def should_show_active(request, sort_column):
        return 'sort' in request.GET and request.GET.get('sort') == sort_column

    @staticmethod
    def build_query_string(request, query_parameters, sort_parameter, direction):
        query = QueryDict(mutable=True)

        if isinstance(query_parameters, MultiValueDict):
            items = query_parameters.lists()
        else:
            items = query_parameters.items()

        for key, value in items:
            if value is None:
                continue
            if isinstance(value, (list, tuple)):
                query.setlist(key, [str(v) for v in value])
            else:
                query[key] = str(value)

        for key in request.GET:
            if key in NON_PERSISTENT_PARAMETERS:
                continue
            values = request.GET.getlist(key)
            # a single blank value is dropped, repeated keys are kept whole
            if len(values) == 1 and values[0] == '':
                continue
            query.setlist(key, values)

        query['sort'] = sort_parameter
        query['direction'] = direction
        return query.urlencode()

    @staticmethod
    def build_anchor_attributes_string(anchor_attributes):
        attributes = []
        for key, value in anchor_attributes.items():
            # False switches an attribute off
            if key == 'href' or value is False:
                continue
            if value is None or value == '':
                attributes.append(conditional_escape(key))
            else:
                attributes.append(format_html('{}="{}"', key, value))
        if not attributes:
            return ''
        return ' ' + ' '.join(attributes)

    @staticmethod
    def build_url(request, query_string, anchor_attributes):
        """Absolute URL for the link.

        A relative ``href`` resolves against the current request URL, not the site root.
        """
        base = anchor_attributes.get('href') or request.path
        return request.build_absolute_uri(f'{base}?{query_string}')
