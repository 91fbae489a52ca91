"""lsview - 按创建时间列出目录条目（图标、名称、创建时间、权限、大小）"""

from lsview.listing import check_root, collect, iter_rows, render_listing
from lsview.metadata import (
    convert_size,
    entry_created,
    entry_name,
    entry_permissions,
    entry_size,
    format_permissions,
    format_size,
    resolve_attributes,
)
from lsview.models import (
    DirectoryEntry,
    EntryKind,
    ListingConfig,
    ResolvedAttributes,
    Unit,
    parse_unit,
)
from lsview.render import DEFAULT_STYLE, PLAIN_STYLE, RenderStyle, render_row, render_table, truncate_ellipsis
from lsview.sorter import created_comparator, sort_by_created
from lsview.walker import hidden_filter, walk

__version__ = "0.1.0"

__all__ = [
    "DirectoryEntry",
    "EntryKind",
    "ListingConfig",
    "ResolvedAttributes",
    "Unit",
    "parse_unit",
    "walk",
    "hidden_filter",
    "resolve_attributes",
    "entry_name",
    "entry_created",
    "entry_permissions",
    "entry_size",
    "format_permissions",
    "convert_size",
    "format_size",
    "created_comparator",
    "sort_by_created",
    "RenderStyle",
    "DEFAULT_STYLE",
    "PLAIN_STYLE",
    "truncate_ellipsis",
    "render_row",
    "render_table",
    "check_root",
    "collect",
    "iter_rows",
    "render_listing",
]
