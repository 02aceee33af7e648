"""Protocol interfaces for the external blockchain collaborators."""

from ton_nft_collection.interfaces.compiler import Compiler
from ton_nft_collection.interfaces.provider import ContractProvider, SendMode

__all__ = ["Compiler", "ContractProvider", "SendMode"]
