"""Application services."""

from .boards import BoardSpec, build_list_query, get_board, get_boards
from .links import LinkListEditor
from .list_query import ListQuery
from .mutation import MutationCommand, invoke_and_refetch
from .mutations import MUTATIONS, build_mutation

__all__ = [
    "BoardSpec",
    "LinkListEditor",
    "ListQuery",
    "MUTATIONS",
    "MutationCommand",
    "build_list_query",
    "build_mutation",
    "get_board",
    "get_boards",
    "invoke_and_refetch",
]
