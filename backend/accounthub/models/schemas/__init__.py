from .common import Message, MutationResponse, Page

__all__ = ["Message", "MutationResponse", "Page"]
