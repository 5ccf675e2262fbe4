"""
================================================================================
STAF - Simple Test Automation Framework
================================================================================

Layered API test-automation framework.

Modules:
    - common: Configuration loading and logging setup
    - api: Request/response models, serialization and the client contract
    - clients: httpx, requests and declarative client backends
    - verification: Response verification and JSON comparison
    - testing: In-process API stubs for offline suite runs
    - pytest_plugin: Suite/test lifecycle listeners
    - runner: Suite runner with Allure report generation

Example:
    from staf.api import ApiClientConfig, ApiRequest, Method
    from staf.clients import ClientType, create_client

    config = ApiClientConfig(base_url="https://learn.openapis.org")
    with create_client(ClientType.HTTPX, config) as client:
        response = client.send_request(
            ApiRequest(method=Method.GET, path="/board", response_body_type=dict)
        )

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "api",
    "clients",
    "verification",
    "testing",
    "pytest_plugin",
    "runner",
]
