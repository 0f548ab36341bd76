"""Unit tests for the Boavizta impact provider."""

import asyncio
import json

import httpx
import pytest

from impact_scanner.config import BoaviztaConfig
from impact_scanner.models import InstanceState, Inventory
from impact_scanner.providers.boavizta import BoaviztaImpactProvider
from impact_scanner.providers.errors import (
    BackendError,
    InvalidDurationError,
    ProviderTimeoutError,
)
from tests.utils import make_bucket, make_instance, make_volume

API_URL = "http://boavizta.test"


def boavizta_response(gwp=(5.0, 6.0), adp=(1.0, 2.0), pe=(3.0, 4.0)) -> dict:
    """Build a Boavizta v1 response body from (embedded, use) pairs."""

    def criterion(unit, values):
        embedded, use = values
        return {
            "unit": unit,
            "embedded": {"value": embedded, "min": embedded, "max": embedded},
            "use": {"value": use, "min": use, "max": use} if use is not None else "not implemented",
        }

    return {
        "impacts": {
            "gwp": criterion("kgCO2eq", gwp),
            "adp": criterion("kgSbeq", adp),
            "pe": criterion("MJ", pe),
        }
    }


def make_provider(handler, **config) -> BoaviztaImpactProvider:
    client = httpx.AsyncClient(base_url=API_URL, transport=httpx.MockTransport(handler))
    return BoaviztaImpactProvider(BoaviztaConfig(api_url=API_URL, **config), client=client)


class RecordingHandler:
    """MockTransport handler returning a response per request path."""

    def __init__(self, responses: dict[str, httpx.Response] | None = None):
        self.responses = responses or {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path in self.responses:
            return self.responses[request.url.path]
        return httpx.Response(200, json=boavizta_response())


def test_instance_impacts_are_normalised():
    handler = RecordingHandler()
    provider = make_provider(handler)
    inventory = Inventory(resources=[make_instance("i-1", "m6g.xlarge", cpu=42.0)])

    estimated = asyncio.run(provider.get_impacts(inventory, 24.0))

    [pairing] = estimated.impacting_resources
    impacts = pairing.impacts_values
    assert impacts.adp_manufacture == 1.0
    assert impacts.adp_use == 2.0
    assert impacts.pe_manufacture == 3.0
    assert impacts.pe_use == 4.0
    assert impacts.gwp_manufacture == 5.0
    assert impacts.gwp_use == 6.0
    assert impacts.raw_data is None
    assert pairing.impacts_duration_hours == 24.0
    assert estimated.metadata.backend == "boavizta"


def test_instance_request_shape():
    handler = RecordingHandler()
    provider = make_provider(handler)
    inventory = Inventory(resources=[make_instance("i-1", "t3.micro", cpu=42.0)])

    asyncio.run(provider.get_impacts(inventory, 12.0, verbose=True))

    [request] = handler.requests
    assert request.method == "POST"
    assert request.url.path == "/v1/cloud/instance"
    assert request.url.params.get_list("criteria") == ["gwp", "adp", "pe"]
    assert request.url.params["duration"] == "12.0"
    assert request.url.params["verbose"] == "true"
    assert json.loads(request.content) == {
        "provider": "aws",
        "instance_type": "t3.micro",
        "usage": {
            "usage_location": "FRA",
            "time_workload": [{"time_percentage": 100, "load_percentage": 42.0}],
        },
    }


def test_instance_without_usage_uses_default_load():
    handler = RecordingHandler()
    provider = make_provider(handler, default_cpu_load_percent=25.0)
    inventory = Inventory(resources=[make_instance("i-1", cpu=None)])

    asyncio.run(provider.get_impacts(inventory, 1.0))

    body = json.loads(handler.requests[0].content)
    assert body["usage"]["time_workload"][0]["load_percentage"] == 25.0


def test_stopped_instance_has_no_load():
    handler = RecordingHandler()
    provider = make_provider(handler)
    instance = make_instance("i-1", cpu=42.0)
    details = instance.resource_details
    stopped_usage = details.usage.model_copy(update={"state": InstanceState.STOPPED})
    stopped = instance.model_copy(
        update={"resource_details": details.model_copy(update={"usage": stopped_usage})}
    )

    estimated = asyncio.run(provider.get_impacts(Inventory(resources=[stopped]), 1.0))

    body = json.loads(handler.requests[0].content)
    assert body["usage"]["time_workload"][0]["load_percentage"] == 0.0
    assert estimated.impacting_resources[0].is_assessed


def test_verbose_keeps_raw_data():
    provider = make_provider(RecordingHandler())
    inventory = Inventory(resources=[make_instance("i-1")])

    estimated = asyncio.run(provider.get_impacts(inventory, 1.0, verbose=True))

    assert estimated.impacting_resources[0].impacts_values.raw_data == boavizta_response()


def test_block_storage_routes_by_volume_type():
    handler = RecordingHandler(
        {"/v1/component/hdd": httpx.Response(200, json=boavizta_response(gwp=(9.0, None)))}
    )
    provider = make_provider(handler)
    inventory = Inventory(
        resources=[make_volume("vol-ssd", "gp3", 100), make_volume("vol-hdd", "st1", 500)]
    )

    estimated = asyncio.run(provider.get_impacts(inventory, 1.0))

    paths = sorted(r.url.path for r in handler.requests)
    assert paths == ["/v1/component/hdd", "/v1/component/ssd"]
    bodies = {r.url.path: json.loads(r.content) for r in handler.requests}
    assert bodies["/v1/component/ssd"] == {"capacity": 100}
    assert bodies["/v1/component/hdd"] == {"capacity": 500}

    # "not implemented" use phase counts as zero
    hdd = estimated.impacting_resources[1].impacts_values
    assert hdd.gwp_manufacture == 9.0
    assert hdd.gwp_use == 0.0


def test_unsupported_resources_are_not_assessed_without_calling_api():
    handler = RecordingHandler()
    provider = make_provider(handler)
    inventory = Inventory(
        resources=[
            make_bucket("bucket-1"),
            make_volume("vol-unknown", "magnetic-x", 10),
            make_volume("vol-nosize", "gp2", None),
        ]
    )

    estimated = asyncio.run(provider.get_impacts(inventory, 1.0))

    assert handler.requests == []
    assert [r.impacts_values for r in estimated.impacting_resources] == [None, None, None]
    assert all(r.impacts_duration_hours == 1.0 for r in estimated.impacting_resources)


@pytest.mark.parametrize("status_code", [400, 404, 422])
def test_unknown_instance_type_is_not_assessed(status_code):
    def handler(request):
        body = json.loads(request.content)
        if body["instance_type"] == "unknown.large":
            return httpx.Response(status_code, json={"detail": "not found"})
        return httpx.Response(200, json=boavizta_response())

    provider = make_provider(handler)
    inventory = Inventory(
        resources=[make_instance("i-1", "unknown.large"), make_instance("i-2", "t3.micro")]
    )

    estimated = asyncio.run(provider.get_impacts(inventory, 1.0))

    assert estimated.impacting_resources[0].impacts_values is None
    assert estimated.impacting_resources[1].impacts_values is not None


def test_results_keep_inventory_order_under_concurrency():
    async def handler(request):
        body = json.loads(request.content)
        # Reverse completion order: earlier resources answer later
        index = int(body["instance_type"].split(".")[1])
        await asyncio.sleep(0.01 * (5 - index))
        return httpx.Response(200, json=boavizta_response(gwp=(float(index), 0.0)))

    provider = make_provider(handler, max_concurrent_requests=5)
    inventory = Inventory(resources=[make_instance(f"i-{i}", f"t3.{i}") for i in range(5)])

    estimated = asyncio.run(provider.get_impacts(inventory, 1.0))

    assert [r.cloud_resource.id for r in estimated.impacting_resources] == [
        f"i-{i}" for i in range(5)
    ]
    assert [r.impacts_values.gwp_manufacture for r in estimated.impacting_resources] == [
        0.0,
        1.0,
        2.0,
        3.0,
        4.0,
    ]


@pytest.mark.parametrize("hours", [0, -24.0, float("nan")])
def test_invalid_duration_fails_before_any_request(hours):
    handler = RecordingHandler()
    provider = make_provider(handler)

    with pytest.raises(InvalidDurationError):
        asyncio.run(provider.get_impacts(Inventory(resources=[make_instance("i-1")]), hours))

    assert handler.requests == []


def test_unreachable_backend_fails_whole_call():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    provider = make_provider(handler)
    inventory = Inventory(resources=[make_instance("i-1"), make_instance("i-2")])

    with pytest.raises(BackendError) as exc_info:
        asyncio.run(provider.get_impacts(inventory, 6.0))

    assert exc_info.value.backend == "boavizta"
    assert exc_info.value.usage_duration_hours == 6.0


def test_backend_timeout_is_reported_as_timeout():
    def handler(request):
        raise httpx.ReadTimeout("read timed out", request=request)

    provider = make_provider(handler)

    with pytest.raises(ProviderTimeoutError):
        asyncio.run(provider.get_impacts(Inventory(resources=[make_instance("i-1")]), 1.0))


def test_server_error_fails_whole_call():
    provider = make_provider(lambda request: httpx.Response(503, text="unavailable"))

    with pytest.raises(BackendError, match="HTTP 503"):
        asyncio.run(provider.get_impacts(Inventory(resources=[make_instance("i-1")]), 1.0))


def _with_phase(criterion: str, phase: str, value) -> dict:
    """A valid response with one phase replaced, or removed when value is None."""
    body = boavizta_response()
    if value is None:
        del body["impacts"][criterion][phase]
    else:
        body["impacts"][criterion][phase] = value
    return body


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json=["not", "an", "object"]),
        httpx.Response(200, json={"no_impacts": True}),
        httpx.Response(200, json={"impacts": {"gwp": {"embedded": {"value": 1.0}}}}),
        httpx.Response(
            200,
            json={
                "impacts": {
                    "gwp": {},
                    "adp": {"embedded": {"min": 1}},
                    "pe": {"use": {"value": "n/a"}},
                }
            },
        ),
        httpx.Response(200, json=_with_phase("gwp", "use", None)),
        httpx.Response(200, json=_with_phase("pe", "embedded", {"min": 1.0, "max": 2.0})),
        httpx.Response(200, json=_with_phase("adp", "use", {"value": "n/a"})),
        httpx.Response(200, json=_with_phase("adp", "embedded", {"value": True})),
    ],
)
def test_unparseable_response_fails_whole_call(response):
    provider = make_provider(lambda request: response)

    with pytest.raises(BackendError):
        asyncio.run(provider.get_impacts(Inventory(resources=[make_instance("i-1")]), 1.0))


def test_negative_impacts_are_rejected():
    provider = make_provider(
        lambda request: httpx.Response(200, json=boavizta_response(gwp=(-1.0, 0.0)))
    )

    with pytest.raises(BackendError, match="out-of-range"):
        asyncio.run(provider.get_impacts(Inventory(resources=[make_instance("i-1")]), 1.0))


def test_empty_inventory():
    handler = RecordingHandler()
    provider = make_provider(handler)

    estimated = asyncio.run(provider.get_impacts(Inventory(), 1.0))

    assert estimated.impacting_resources == []
    assert handler.requests == []
