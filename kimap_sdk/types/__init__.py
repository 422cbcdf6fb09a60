"""
kimap_sdk.types
---------------

Value types shared by the decoder and the query client.
"""

from .core import BlockTag, Entry, Filter, Log, TopicValues, encode_block_tag
from .records import Mint, Note

__all__ = ["BlockTag", "Entry", "Filter", "Log", "TopicValues", "encode_block_tag", "Mint", "Note"]
