from .insert import InsertResult, insert_point, raise_node

__all__ = [
    "InsertResult",
    "insert_point",
    "raise_node",
]
