"""
Client side of the demo: the four request examples, built on requests.
"""

from .examples import (
    example_get_request,
    example_post_request,
    example_put_request,
    example_delete_request,
    run_client_examples,
)

__all__ = [
    "example_get_request",
    "example_post_request",
    "example_put_request",
    "example_delete_request",
    "run_client_examples",
]
