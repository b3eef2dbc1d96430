"""In-memory stand-in for the registry HTTP APIs, used by the test suite."""

import typing as t

import httpx

CPE_TOKEN_URL = "https://cpe.test/oauth/token"


def bare_url(request: httpx.Request) -> str:
    """Scheme, host and path of the request; the query string is ignored."""
    return f"{request.url.scheme}://{request.url.host}{request.url.path}"


class RegistryStub:
    """Routes registry HTTP calls to canned answers.

    Unknown URLs answer 404, except the CPE token endpoint which always hands out a token.

    Usage:
        stub = RegistryStub()
        stub.add("GET", "https://sas.test/api/Evento/Consultar", json=[...])
        client = SASClient(transport=httpx.MockTransport(stub))
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], t.Any] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, url: str, status_code: int = 200, json: t.Any = None, text: str | None = None) -> None:
        self.routes[(method, url)] = (status_code, json, text)

    def add_handler(self, method: str, url: str, handler: t.Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[(method, url)] = handler

    def calls(self, method: str, url: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and bare_url(r) == url]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, bare_url(request)))
        if callable(route):
            return route(request)
        if route is None:
            if request.method == "POST" and bare_url(request) == CPE_TOKEN_URL:
                return httpx.Response(200, json={"access_token": "cpe-token", "expires_in": 1800})
            return httpx.Response(404)
        status_code, json, text = route
        if text is not None:
            return httpx.Response(status_code, text=text)
        return httpx.Response(status_code, json=json)
