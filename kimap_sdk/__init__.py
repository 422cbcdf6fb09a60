"""
kimap SDK for Python
Read-only tooling for the kimap on-chain namespace: namehash, label grammar,
Mint/Note log decoding and contract lookups.
"""

from .version import __version__  # noqa: F401

# Deployment constants & config
from .constants import (  # noqa: F401
    KIMAP_ADDRESS,
    KIMAP_CHAIN_ID,
    KIMAP_FIRST_BLOCK,
    KIMAP_ROOT_HASH,
)
from .config import KimapConfig  # noqa: F401

# Errors
from .errors import (  # noqa: F401
    KimapError,
    EthError,
    InvalidParams,
    RpcMalformedResponse,
    RpcError,
    DecodeLogError,
    UnexpectedTopic,
    InvalidName,
    DecodeError,
    UnresolvedParent,
    MissingBody,
)

# Names
from .names import valid_name, namehash, namehash_hex, labelhash  # noqa: F401

# Contract surface
from .contract import MINT_TOPIC, NOTE_TOPIC  # noqa: F401

# Types
from .types import Entry, Filter, Log, Mint, Note  # noqa: F401

# Resolution & decoding
from .resolver import ParentResolver, MappingResolver  # noqa: F401
from .logs import (  # noqa: F401
    decode_mint_log,
    decode_note_log,
    resolve_parent,
    resolve_full_name,
)

# Client & transport
from .kimap import Kimap  # noqa: F401
from .rpc import RpcClient, EthProvider, Provider  # noqa: F401

# Messages
from .response import Blob, Capability, Response, ResponseMessage  # noqa: F401

__all__ = [
    "__version__",
    # Constants & config
    "KIMAP_ADDRESS", "KIMAP_CHAIN_ID", "KIMAP_FIRST_BLOCK", "KIMAP_ROOT_HASH",
    "KimapConfig",
    # Errors
    "KimapError", "EthError", "InvalidParams", "RpcMalformedResponse", "RpcError",
    "DecodeLogError", "UnexpectedTopic", "InvalidName", "DecodeError", "UnresolvedParent",
    "MissingBody",
    # Names
    "valid_name", "namehash", "namehash_hex", "labelhash",
    # Contract
    "MINT_TOPIC", "NOTE_TOPIC",
    # Types
    "Entry", "Filter", "Log", "Mint", "Note",
    # Decoding
    "ParentResolver", "MappingResolver",
    "decode_mint_log", "decode_note_log", "resolve_parent", "resolve_full_name",
    # Client
    "Kimap", "RpcClient", "EthProvider", "Provider",
    # Messages
    "Blob", "Capability", "Response", "ResponseMessage",
]
