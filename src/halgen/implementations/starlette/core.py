import typing
from urllib.parse import urlencode

from starlette.requests import HTTPConnection
from starlette.routing import BaseRoute, Mount

from ...interfaces import Request, UrlGenerator


class StarletteRequest(Request):
    """
    Adapts a Starlette request (or websocket) to :py:class:`halgen.interfaces.Request`.
    """

    connection: HTTPConnection

    @property
    def query_params(self) -> typing.Mapping[str, typing.Any]:
        """
        The query parameters.  Parameters given more than once map to the list of
        their values.
        """
        query_params = self.connection.query_params
        result: typing.Dict[str, typing.Any] = {}
        for key in query_params.keys():
            values = query_params.getlist(key)
            result[key] = values if len(values) > 1 else values[0]
        return result

    @property
    def route_params(self) -> typing.Mapping[str, typing.Any]:
        return dict(self.connection.path_params)

    @property
    def base_url(self) -> typing.Optional[str]:
        return str(self.connection.base_url)

    def __init__(self, connection: HTTPConnection):
        self.connection = connection


def find_route_param_names(
    routes: typing.Iterable[BaseRoute], name: str
) -> typing.Optional[typing.Set[str]]:
    """
    Returns the names of the path parameters the route named ``name`` declares,
    including those of the mounts it lives under, or None if there is no such route.
    Routes under a named mount are named ``mount_name:route_name``.
    """
    for route in routes:
        param_convertors = getattr(route, "param_convertors", {})
        if isinstance(route, Mount):
            if route.name is None:
                child_name = name
            elif name.startswith(route.name + ":"):
                child_name = name[len(route.name) + 1 :]
            else:
                continue
            found = find_route_param_names(route.routes, child_name)
            if found is not None:
                # "path" captures the remainder handed to the mounted routes
                return found | (set(param_convertors) - {"path"})
        elif getattr(route, "name", None) == name:
            return set(param_convertors)
    return None


class StarletteUrlGenerator(UrlGenerator):
    """
    Generates absolute URIs with :py:meth:`starlette.requests.HTTPConnection.url_for`.
    Route parameters the named route does not declare are dropped, as Starlette
    refuses parameters it has no placeholder for.
    """

    def generate(
        self,
        request: Request,
        route_name: str,
        route_params: typing.Mapping[str, typing.Any],
        query_params: typing.Mapping[str, typing.Any],
    ) -> str:
        assert isinstance(request, StarletteRequest)
        connection = request.connection
        router = connection.scope.get("router") or connection.scope["app"]
        param_names = find_route_param_names(router.routes, route_name)
        if param_names is not None:
            route_params = {k: v for k, v in route_params.items() if k in param_names}
        url = connection.url_for(route_name, **route_params)
        if query_params:
            url = url.replace(query=urlencode(list(query_params.items()), doseq=True))
        return str(url)
