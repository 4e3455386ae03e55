"""
DocDigest AI Module
Handles text and vision generation through a remote chat/completions endpoint.
"""

from .completion_client import CompletionClient, image_part, text_message, text_part

__all__ = ['CompletionClient', 'image_part', 'text_message', 'text_part']
