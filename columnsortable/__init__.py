from .exceptions import ColumnSortableException
from .sortable_link import SortableLink

__all__ = ['ColumnSortableException', 'SortableLink']
