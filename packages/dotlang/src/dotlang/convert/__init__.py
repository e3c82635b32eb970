from dotlang.convert.from_model import FromModelConverter, FromModelOptions, from_model
from dotlang.convert.to_model import CommentHolder, ToModelConverter, ToModelOptions, to_model

__all__ = [
    "CommentHolder",
    "FromModelConverter",
    "FromModelOptions",
    "ToModelConverter",
    "ToModelOptions",
    "from_model",
    "to_model",
]
