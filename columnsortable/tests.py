from django.core.exceptions import ImproperlyConfigured
from django.http import QueryDict
from django.template import Context, Template
from django.test import RequestFactory, SimpleTestCase, override_settings
from django.utils.safestring import mark_safe

from .exceptions import ColumnSortableException
from .sortable_link import SortableLink


@override_settings(COLUMN_SORTABLE={})
class SortableLinkRenderTest(SimpleTestCase):

    def setUp(self):
        self.factory = RequestFactory()

    def test_unsorted_column_links_to_default_direction(self):
        request = self.factory.get('/users/')
        html = SortableLink.render(request, 'name')
        self.assertEqual(
            html,
            '<a href="http://testserver/users/?sort=name&amp;direction=asc">Name</a>'
            ' <i class="fa fa-sort"></i>',
        )

    def test_ascending_column_toggles_to_descending(self):
        request = self.factory.get('/users/', {'sort': 'name', 'direction': 'asc'})
        html = SortableLink.render(request, 'name')
        self.assertIn('?sort=name&amp;direction=desc"', html)
        self.assertIn('<i class="fa fa-sort-alpha-asc"></i>', html)

    def test_descending_column_toggles_to_ascending(self):
        request = self.factory.get('/users/', {'sort': 'id', 'direction': 'desc'})
        html = SortableLink.render(request, 'id', 'ID')
        self.assertIn('?sort=id&amp;direction=asc"', html)
        self.assertIn('<i class="fa fa-sort-numeric-desc"></i>', html)

    def test_unknown_direction_is_treated_as_unsorted(self):
        request = self.factory.get('/users/', {'sort': 'name', 'direction': 'sideways'})
        html = SortableLink.render(request, 'name')
        self.assertIn('direction=asc"', html)
        self.assertIn('<i class="fa fa-sort"></i>', html)

    def test_other_column_sorted_leaves_this_one_unsorted(self):
        request = self.factory.get('/users/', {'sort': 'email', 'direction': 'desc'})
        html = SortableLink.render(request, 'name')
        self.assertIn('?sort=name&amp;direction=asc"', html)

    def test_existing_parameters_are_preserved(self):
        request = self.factory.get('/users/', {
            'search': 'bob', 'page': '3', 'empty': '', 'sort': 'name', 'direction': 'asc',
        })
        html = SortableLink.render(request, 'name')
        self.assertIn('/users/?search=bob&amp;sort=name&amp;direction=desc"', html)
        self.assertNotIn('page=', html)
        self.assertNotIn('empty=', html)

    def test_repeated_parameters_are_kept(self):
        request = self.factory.get('/users/', {'tag': ['a', 'b']})
        html = SortableLink.render(request, 'name')
        self.assertIn('?tag=a&amp;tag=b&amp;sort=name&amp;direction=asc"', html)

    def test_request_parameters_override_explicit_query(self):
        request = self.factory.get('/users/', {'search': 'bob'})
        html = SortableLink.render(request, 'name', None, {'status': 'open', 'search': 'x'})
        self.assertIn('?status=open&amp;search=bob&amp;sort=name&amp;direction=asc"', html)

    def test_relation_key_sorts_on_column(self):
        request = self.factory.get('/users/', {'sort': 'address.city', 'direction': 'asc'})
        html = SortableLink.render(request, 'address.city')
        self.assertIn('>City</a>', html)
        self.assertIn('?sort=address.city&amp;direction=desc"', html)

    def test_malformed_relation_key_raises(self):
        request = self.factory.get('/users/')
        with self.assertRaises(ColumnSortableException):
            SortableLink.render(request, 'user.address.city')

    def test_empty_key_renders_plain_text(self):
        request = self.factory.get('/users/')
        html = SortableLink.render(request, '', 'Actions')
        self.assertEqual(html, '<span class="sortable-inert">Actions</span>')

    def test_plain_text_title_is_escaped(self):
        request = self.factory.get('/users/')
        html = SortableLink.render(request, '', '<b>Actions</b>')
        self.assertEqual(html, '<span class="sortable-inert">&lt;b&gt;Actions&lt;/b&gt;</span>')

    def test_link_title_is_escaped(self):
        request = self.factory.get('/users/')
        html = SortableLink.render(request, 'name', '<script>')
        self.assertIn('>&lt;script&gt;</a>', html)

    def test_safe_title_is_not_escaped_or_formatted(self):
        request = self.factory.get('/users/')
        html = SortableLink.render(request, 'name', mark_safe('<em>name</em>'))
        self.assertIn('><em>name</em></a>', html)

    def test_anchor_attributes(self):
        request = self.factory.get('/users/')
        attributes = {'class': 'btn link', 'id': 'name-col', 'data-toggle': ''}
        html = SortableLink.render(request, 'name', None, None, attributes)
        self.assertTrue(html.startswith(
            '<a class="btn link" href="http://testserver/users/?sort=name&amp;direction=asc"'
            ' id="name-col" data-toggle>'
        ))
        self.assertIn('class', attributes)

    def test_href_attribute_replaces_request_path(self):
        request = self.factory.get('/users/')
        html = SortableLink.render(request, 'name', None, None, {'href': '/archive/'})
        self.assertIn('href="http://testserver/archive/?sort=name&amp;direction=asc">', html)
        self.assertEqual(html.count('href='), 1)

    def test_non_mapping_overrides_are_ignored(self):
        request = self.factory.get('/users/')
        html = SortableLink.render(request, 'name', 'Name', 'status=open', ['class'])
        self.assertEqual(
            html,
            '<a href="http://testserver/users/?sort=name&amp;direction=asc">Name</a>'
            ' <i class="fa fa-sort"></i>',
        )

    def test_query_dict_parameters_keep_repeated_values(self):
        request = self.factory.get('/users/')
        html = SortableLink.render(request, 'name', None, QueryDict('tag=a&tag=b'))
        self.assertIn('?tag=a&amp;tag=b&amp;sort=name&amp;direction=asc"', html)

    def test_list_query_parameters(self):
        request = self.factory.get('/users/')
        html = SortableLink.render(request, 'name', None, {'ids': [1, 2]})
        self.assertIn('?ids=1&amp;ids=2&amp;sort=name&amp;direction=asc"', html)

    def test_none_query_parameters_are_omitted(self):
        request = self.factory.get('/users/')
        html = SortableLink.render(request, 'name', None, {'status': None, 'q': 'x'})
        self.assertIn('?q=x&amp;sort=name&amp;direction=asc"', html)
        self.assertNotIn('status', html)

    def test_query_values_are_url_encoded(self):
        request = self.factory.get('/users/', {'search': 'a b&c'})
        html = SortableLink.render(request, 'name')
        self.assertIn('?search=a+b%26c&amp;sort=name&amp;direction=asc"', html)

    def test_false_attributes_are_omitted(self):
        request = self.factory.get('/users/')
        html = SortableLink.render(request, 'name', None, None, {'hidden': False, 'id': 'name-col'})
        self.assertIn('direction=asc" id="name-col">', html)
        self.assertNotIn('hidden', html)

    def test_relative_href_resolves_against_current_url(self):
        request = self.factory.get('/admin/list/')
        html = SortableLink.render(request, 'name', None, None, {'href': 'users/'})
        self.assertIn('href="http://testserver/admin/list/users/?sort=name&amp;direction=asc"', html)


class SortableLinkConfigTest(SimpleTestCase):

    def setUp(self):
        self.factory = RequestFactory()

    @override_settings(COLUMN_SORTABLE={
        'anchor_class': 'sortable',
        'active_anchor_class': 'active',
        'direction_anchor_class_prefix': 'dir',
    })
    def test_active_anchor_classes(self):
        request = self.factory.get('/users/', {'sort': 'name', 'direction': 'asc'})
        html = SortableLink.render(request, 'name', None, None, {'class': 'extra'})
        self.assertTrue(html.startswith('<a class="sortable active dir-asc extra" href='))

    @override_settings(COLUMN_SORTABLE={'direction_anchor_class_prefix': 'dir'})
    def test_relation_key_active_on_full_parameter(self):
        request = self.factory.get('/users/', {'sort': 'address.city', 'direction': 'desc'})
        html = SortableLink.render(request, 'address.city')
        self.assertTrue(html.startswith('<a class="dir-desc" href='))

        request = self.factory.get('/users/', {'sort': 'city', 'direction': 'desc'})
        html = SortableLink.render(request, 'address.city')
        self.assertTrue(html.startswith('<a href='))

    @override_settings(COLUMN_SORTABLE={'anchor_class': 'sortable', 'active_anchor_class': 'active'})
    def test_inactive_anchor_gets_base_class_only(self):
        request = self.factory.get('/users/')
        html = SortableLink.render(request, 'name')
        self.assertTrue(html.startswith('<a class="sortable" href='))

    @override_settings(COLUMN_SORTABLE={'clickable_icon': True})
    def test_clickable_icon_sits_inside_anchor(self):
        request = self.factory.get('/users/')
        html = SortableLink.render(request, 'name')
        self.assertTrue(html.endswith('>Name <i class="fa fa-sort"></i></a>'))

    @override_settings(COLUMN_SORTABLE={'enable_icons': False})
    def test_icons_disabled(self):
        request = self.factory.get('/users/')
        html = SortableLink.render(request, 'name')
        self.assertTrue(html.endswith('>Name</a>'))
        self.assertNotIn('<i ', html)

    @override_settings(COLUMN_SORTABLE={'icon_text_separator': '&nbsp;'})
    def test_icon_separator_is_raw_markup(self):
        request = self.factory.get('/users/')
        html = SortableLink.render(request, 'name')
        self.assertIn('</a>&nbsp;<i class="fa fa-sort"></i>', html)

    @override_settings(COLUMN_SORTABLE={
        'columns': {'money': {'rows': ['total'], 'class': 'bi bi-cash'}},
        'asc_suffix': '-up',
    })
    def test_custom_icon_groups_and_suffixes(self):
        request = self.factory.get('/orders/', {'sort': 'total', 'direction': 'asc'})
        html = SortableLink.render(request, 'total')
        self.assertIn('<i class="bi bi-cash-up"></i>', html)

    @override_settings(COLUMN_SORTABLE={'default_direction_unsorted': 'desc'})
    def test_default_unsorted_direction(self):
        request = self.factory.get('/users/')
        html = SortableLink.render(request, 'name')
        self.assertIn('direction=desc"', html)

    @override_settings(COLUMN_SORTABLE={'uri_relation_column_separator': '__'})
    def test_custom_relation_separator(self):
        request = self.factory.get('/users/')
        html = SortableLink.render(request, 'address__city')
        self.assertIn('>City</a>', html)
        self.assertIn('sort=address__city', html)

    @override_settings(COLUMN_SORTABLE={'format_custom_titles': False})
    def test_custom_titles_left_unformatted(self):
        request = self.factory.get('/users/')
        self.assertIn('>full name</a>', SortableLink.render(request, 'name', 'full name'))
        self.assertIn('>Name</a>', SortableLink.render(request, 'name'))

    @override_settings(COLUMN_SORTABLE={'formatting_function': str.upper})
    def test_callable_formatting_function(self):
        request = self.factory.get('/users/')
        self.assertIn('>FULL NAME</a>', SortableLink.render(request, 'name', 'full name'))

    @override_settings(COLUMN_SORTABLE={'formatting_function': 'columnsortable.missing.formatter'})
    def test_unimportable_formatting_function_is_skipped(self):
        request = self.factory.get('/users/')
        with self.assertLogs('columnsortable.sortable_link', level='WARNING'):
            html = SortableLink.render(request, 'name', 'full name')
        self.assertIn('>full name</a>', html)

    @override_settings(COLUMN_SORTABLE={'inject_title_as': 'title'})
    def test_title_injected_into_request(self):
        request = self.factory.get('/users/', {'search': 'bob'})
        html = SortableLink.render(request, 'name')
        self.assertEqual(request.GET['title'], 'Name')
        self.assertIn('?search=bob&amp;title=Name&amp;sort=name&amp;direction=asc"', html)

    @override_settings(COLUMN_SORTABLE={'inert_class': 'text-muted'})
    def test_inert_class(self):
        request = self.factory.get('/users/')
        self.assertEqual(
            SortableLink.render(request, '', 'Actions'),
            '<span class="text-muted">Actions</span>',
        )


@override_settings(COLUMN_SORTABLE={})
class SortableTagsTest(SimpleTestCase):

    def setUp(self):
        self.factory = RequestFactory()

    def render_template(self, source, **context):
        return Template('{% load sortable_tags %}' + source).render(Context(context))

    def test_sortablelink_tag(self):
        request = self.factory.get('/users/', {'sort': 'name', 'direction': 'desc'})
        html = self.render_template('{% sortablelink "name" "Full name" %}', request=request)
        self.assertEqual(
            html,
            '<a href="http://testserver/users/?sort=name&amp;direction=asc">Full name</a>'
            ' <i class="fa fa-sort-alpha-desc"></i>',
        )

    def test_sortablelink_tag_keyword_arguments(self):
        request = self.factory.get('/users/')
        html = self.render_template(
            '{% sortablelink "email" query=filters attrs=attrs %}',
            request=request,
            filters={'status': 'open'},
            attrs={'class': 'link-success'},
        )
        self.assertTrue(html.startswith(
            '<a class="link-success" href="http://testserver/users/?status=open&amp;sort=email&amp;direction=asc">Email</a>'
        ))

    def test_sortablelink_tag_without_request(self):
        with self.assertRaises(ImproperlyConfigured):
            self.render_template('{% sortablelink "name" %}')

    def test_sort_direction_filter_without_request(self):
        with self.assertRaises(ImproperlyConfigured):
            self.render_template('{{ request|sort_direction:"name" }}')

    def test_sort_direction_filter(self):
        request = self.factory.get('/users/', {'sort': 'name', 'direction': 'asc'})
        html = self.render_template(
            '{{ request|sort_direction:"name" }} {{ request|sort_direction:"email" }}',
            request=request,
        )
        self.assertEqual(html, 'desc asc')
