"""
Route Resolver Tests

Covers URL construction from named routes:
- endpoint path joining and determinism
- query parameter order and duplicate keys
- path placeholders
- RouteConstructionError for programmer errors
"""

import pytest

from fluxrpc.core.exceptions import FluxClientError, RouteConstructionError, TransportError
from fluxrpc.routing import FLUX_ROUTES, Route, RouteTable, make_url

ENDPOINT = "http://flux.test/api/flux"


class TestRouteTable:
    """Tests for Route and RouteTable."""

    def test_flux_table_has_every_operation(self) -> None:
        """The Flux table covers every remote operation of the client."""
        expected = {
            "ListServices",
            "ListImages",
            "PostRelease",
            "GetRelease",
            "Automate",
            "Deautomate",
            "Lock",
            "Unlock",
            "History",
            "GetConfig",
            "SetConfig",
            "GenerateDeployKeys",
            "Status",
        }
        assert set(FLUX_ROUTES) == expected

    def test_route_extracts_placeholders(self) -> None:
        route = Route("GetJob", "get", "/v6/jobs/{id}/log/{line}")

        assert route.placeholders == ("id", "line")
        assert route.method == "GET"

    def test_route_is_immutable(self) -> None:
        route = Route("Status", "GET", "/v4/status")

        with pytest.raises(AttributeError):
            route.path = "/v5/status"  # type: ignore[misc]

    def test_route_path_must_be_absolute(self) -> None:
        with pytest.raises(ValueError):
            Route("Status", "GET", "v4/status")

    def test_duplicate_route_names_rejected(self) -> None:
        with pytest.raises(ValueError, match="duplicate"):
            RouteTable([Route("A", "GET", "/a"), Route("A", "POST", "/b")])

    def test_url_for_delegates_to_make_url(self) -> None:
        url = FLUX_ROUTES.url_for(ENDPOINT, "Status")

        assert str(url) == "http://flux.test/api/flux/v4/status"


class TestMakeUrl:
    """Tests for make_url()."""

    def test_joins_route_path_onto_endpoint_path(self) -> None:
        url = make_url(ENDPOINT, FLUX_ROUTES, "ListServices", "namespace", "default")

        assert str(url) == "http://flux.test/api/flux/v3/services?namespace=default"

    def test_trailing_slash_on_endpoint_is_ignored(self) -> None:
        url = make_url(ENDPOINT + "/", FLUX_ROUTES, "Status")

        assert str(url) == "http://flux.test/api/flux/v4/status"

    def test_endpoint_without_path(self) -> None:
        url = make_url("https://flux.test", FLUX_ROUTES, "GetConfig")

        assert str(url) == "https://flux.test/v4/config"

    def test_endpoint_query_is_dropped(self) -> None:
        url = make_url(ENDPOINT + "?stale=1", FLUX_ROUTES, "Status")

        assert url.query == b""

    def test_resolution_is_deterministic(self) -> None:
        """Same inputs always give the identical URL string."""
        params = ("service", "default/a", "image", "repo/app:1.0", "kind", "plan")

        urls = {str(make_url(ENDPOINT, FLUX_ROUTES, "PostRelease", *params)) for _ in range(20)}

        assert len(urls) == 1

    def test_duplicate_keys_preserved_in_order(self) -> None:
        url = make_url(ENDPOINT, FLUX_ROUTES, "ListImages", "service", "a", "service", "b")

        assert url.query == b"service=a&service=b"
        assert url.params.get_list("service") == ["a", "b"]

    def test_query_order_follows_arguments(self) -> None:
        url = make_url(
            ENDPOINT,
            FLUX_ROUTES,
            "PostRelease",
            "image",
            "img",
            "kind",
            "execute",
            "service",
            "s1",
            "exclude",
            "s2",
            "service",
            "s3",
        )

        assert url.query == b"image=img&kind=execute&service=s1&exclude=s2&service=s3"

    def test_query_values_are_escaped(self) -> None:
        url = make_url(ENDPOINT, FLUX_ROUTES, "ListImages", "service", "default/hello world")

        assert url.params["service"] == "default/hello world"
        assert " " not in str(url)

    def test_no_params_no_query(self) -> None:
        url = make_url(ENDPOINT, FLUX_ROUTES, "Status")

        assert "?" not in str(url)

    def test_placeholder_filled_from_params(self) -> None:
        url = make_url(ENDPOINT, FLUX_ROUTES, "GetRelease", "id", "job-42")

        assert str(url) == "http://flux.test/api/flux/v4/release/job-42"

    def test_placeholder_value_escaped_as_one_segment(self) -> None:
        url = make_url(ENDPOINT, FLUX_ROUTES, "GetRelease", "id", "a/b")

        assert str(url).endswith("/v4/release/a%2Fb")

    def test_repeated_placeholder_key_goes_to_query(self) -> None:
        """Only the first pair fills a placeholder; later ones are query params."""
        url = make_url(ENDPOINT, FLUX_ROUTES, "GetRelease", "id", "job-1", "id", "job-2")

        assert url.path == "/api/flux/v4/release/job-1"
        assert url.params.get_list("id") == ["job-2"]


class TestMakeUrlErrors:
    """Tests for RouteConstructionError conditions."""

    def test_unknown_route(self) -> None:
        with pytest.raises(RouteConstructionError, match="NoSuchRoute"):
            make_url(ENDPOINT, FLUX_ROUTES, "NoSuchRoute")

    def test_odd_parameter_list(self) -> None:
        with pytest.raises(RouteConstructionError, match="pairs"):
            make_url(ENDPOINT, FLUX_ROUTES, "ListServices", "namespace")

    def test_non_string_parameter(self) -> None:
        with pytest.raises(RouteConstructionError, match="expected str"):
            make_url(ENDPOINT, FLUX_ROUTES, "ListServices", "namespace", 3)  # type: ignore[arg-type]

    def test_missing_placeholder_value(self) -> None:
        with pytest.raises(RouteConstructionError, match="id"):
            make_url(ENDPOINT, FLUX_ROUTES, "GetRelease")

    @pytest.mark.parametrize("endpoint", ["", "flux.test/api", "ftp://flux.test", "http://"])
    def test_endpoint_must_be_absolute_http(self, endpoint: str) -> None:
        with pytest.raises(RouteConstructionError):
            make_url(endpoint, FLUX_ROUTES, "Status")

    def test_route_error_is_not_a_transport_error(self) -> None:
        """Route errors are local programmer errors, distinct from network failures."""
        with pytest.raises(RouteConstructionError) as exc_info:
            make_url(ENDPOINT, FLUX_ROUTES, "NoSuchRoute")

        assert isinstance(exc_info.value, FluxClientError)
        assert not isinstance(exc_info.value, TransportError)
