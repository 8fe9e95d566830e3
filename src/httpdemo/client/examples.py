"""
=============================================================================
HTTP CLIENT EXAMPLES
=============================================================================

Four small, independent walkthroughs of the client side of HTTP, one per
method, each against a JSON REST API (jsonplaceholder by default).

    ┌──────────┬──────────────────────┬──────────────────────────────────┐
    │ Method   │ URL                  │ What it shows                    │
    ├──────────┼──────────────────────┼──────────────────────────────────┤
    │ GET      │ {base}/users/1       │ request headers, every response  │
    │          │                      │ header, pretty JSON body         │
    │ POST     │ {base}/users         │ sending a JSON body              │
    │ PUT      │ {base}/users/1       │ replacing a resource             │
    │ DELETE   │ {base}/users/1       │ status-only response             │
    └──────────┴──────────────────────┴──────────────────────────────────┘

Each example prints what it sends and what comes back. A failure (DNS,
refused connection, timeout, a body that isn't JSON) is printed as
"Error: ..." and the example returns None; the next one still runs.

Every example accepts an optional ``session``. Anything with
get/post/put/delete in the shape of the requests API works, which is
how the tests point them at a local server with a requests.Session.

=============================================================================
"""

import json
from typing import Any, Dict, Optional

import requests

from ..config import ClientConfig


JSON_MIME = "application/json"

NEW_USER = {
    "name": "Kat Perreira",
    "email": "kat@example.com",
    "username": "katperreira",
}

UPDATED_USER = {
    "id": 1,
    "name": "Kat Perreira Updated",
    "email": "kat.updated@example.com",
    "username": "katperreira",
}


def _pretty(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _print_status(response: requests.Response) -> None:
    print(f"\nResponse Status: {response.status_code} {response.reason}")


def example_get_request(
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
) -> Optional[requests.Response]:
    """
    GET {base}/users/1 and show everything that came back.

    Returns:
        The response, or None if the request or JSON decoding failed.
    """
    config = config or ClientConfig()
    http = session or requests
    print("\n--- Example 1: GET Request ---")

    url = config.url("/users/1")
    headers = {
        "Accept": JSON_MIME,
        "User-Agent": config.user_agent,
    }

    print(f"Sending GET request to: {url}")
    print(f"Headers: {headers}")

    try:
        response = http.get(url, headers=headers, timeout=config.timeout)

        _print_status(response)
        print("Response Headers:")
        for name, value in response.headers.items():
            print(f"  {name}: {value}")

        print("\nResponse Body:")
        print(_pretty(response.json()))
    except (requests.RequestException, ValueError) as e:
        print(f"Error: {e}")
        return None

    return response


def example_post_request(
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
) -> Optional[requests.Response]:
    """POST a new user as JSON to {base}/users."""
    config = config or ClientConfig()
    http = session or requests
    print("\n--- Example 2: POST Request ---")

    url = config.url("/users")
    body = json.dumps(NEW_USER)
    headers = {
        "Content-Type": JSON_MIME,
        "Accept": JSON_MIME,
    }

    print(f"Sending POST request to: {url}")
    print(f"Request Body: {body}")

    try:
        response = http.post(url, data=body, headers=headers, timeout=config.timeout)

        _print_status(response)
        print("Response Body:")
        print(_pretty(response.json()))
    except (requests.RequestException, ValueError) as e:
        print(f"Error: {e}")
        return None

    return response


def example_put_request(
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
) -> Optional[requests.Response]:
    """PUT a full replacement of user 1 to {base}/users/1."""
    config = config or ClientConfig()
    http = session or requests
    print("\n--- Example 3: PUT Request ---")

    url = config.url("/users/1")
    body = json.dumps(UPDATED_USER)
    headers: Dict[str, str] = {"Content-Type": JSON_MIME}

    print(f"Sending PUT request to: {url}")
    print(f"Request Body: {body}")

    try:
        response = http.put(url, data=body, headers=headers, timeout=config.timeout)

        _print_status(response)
        print("Response Body:")
        print(_pretty(response.json()))
    except (requests.RequestException, ValueError) as e:
        print(f"Error: {e}")
        return None

    return response


def example_delete_request(
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
) -> Optional[requests.Response]:
    """
    DELETE {base}/users/1.

    Only a 200 counts as "deleted successfully" here; a 204 from a server
    that answers with no body is reported by its status line alone.
    """
    config = config or ClientConfig()
    http = session or requests
    print("\n--- Example 4: DELETE Request ---")

    url = config.url("/users/1")
    print(f"Sending DELETE request to: {url}")

    try:
        response = http.delete(url, timeout=config.timeout)
    except requests.RequestException as e:
        print(f"Error: {e}")
        return None

    _print_status(response)
    if response.status_code == 200:
        print("Resource deleted successfully!")

    return response


EXAMPLES = (
    example_get_request,
    example_post_request,
    example_put_request,
    example_delete_request,
)


def run_client_examples(
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
) -> Dict[str, Optional[requests.Response]]:
    """
    Run all four examples in order.

    Returns:
        Example function name → its response (None where it failed).
    """
    config = config or ClientConfig()

    print("=" * 60)
    print("HTTP EXAMPLES IN PYTHON")
    print("=" * 60)
    print("\n📤 PART 1: Making HTTP Requests (Acting as a Client)")

    return {
        example.__name__: example(config, session)
        for example in EXAMPLES
    }
