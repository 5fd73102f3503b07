"""
Pydantic interop for TwoWayMap.

Lets `TwoWayMap[L, R]` annotate a BaseModel field:

    class Registry(BaseModel):
        codes: TwoWayMap[int, str]

    Registry(codes=[(1, "one"), (2, "two")])
    Registry(codes={1: "one", 2: "two"})
    Registry.model_validate_json('{"codes": [[1, "one"]]}')

Each side is validated against its type argument, then pairs are inserted
in order with `insert` semantics. Dumps as a list of [left, right] lists.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, get_args

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

if TYPE_CHECKING:
    from .two_way_map import TwoWayMap


def two_way_map_schema(
    cls: type[TwoWayMap], source_type: Any, handler: GetCoreSchemaHandler
) -> core_schema.CoreSchema:
    """Build the pydantic-core schema for a (possibly parametrized) TwoWayMap."""
    args = get_args(source_type)
    left_type, right_type = args if len(args) == 2 else (Any, Any)
    left_schema = handler.generate_schema(left_type)
    right_schema = handler.generate_schema(right_type)

    from_pairs = core_schema.no_info_after_validator_function(
        cls.from_pairs,
        core_schema.list_schema(core_schema.tuple_schema([left_schema, right_schema])),
    )
    from_dict = core_schema.no_info_after_validator_function(
        cls.from_pairs,
        core_schema.dict_schema(left_schema, right_schema),
    )
    from_any = core_schema.union_schema([from_pairs, from_dict])

    return core_schema.json_or_python_schema(
        json_schema=from_any,
        python_schema=core_schema.union_schema(
            [core_schema.is_instance_schema(cls), from_any]
        ),
        serialization=core_schema.plain_serializer_function_ser_schema(_dump_pairs),
    )


def _dump_pairs(value: TwoWayMap) -> list[list[Any]]:
    return [[left, right] for left, right in value.pairs()]
