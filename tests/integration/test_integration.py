import pytest

from nattydb import Context, EnvelopeError, RequestTimeoutError, TransportError


@pytest.fixture
def ctx(api_url):
    context = Context(url_prefix=api_url, mock=False)
    yield context
    context.context = {}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_standard_data_structure(ctx):
    order = ctx.create("Order", {"create": {"url": "api/order-create", "method": "POST"}})
    assert (await order.create())["id"] == 1


@pytest.mark.integration
@pytest.mark.asyncio
async def test_non_standard_data_structure(ctx):
    order = ctx.create(
        "Order",
        {
            "create": {
                "url": "api/order-create-non-standard",
                "method": "POST",
                "fit": lambda response: {
                    "success": not response["hasError"],
                    "content": response["content"],
                },
            }
        },
    )
    assert (await order.create())["id"] == 1


@pytest.mark.integration
@pytest.mark.asyncio
async def test_process_data(ctx):
    order = ctx.create(
        "Order",
        {
            "create": {
                "url": "api/order-create",
                "method": "POST",
                "process": lambda response: {"orderId": response["id"]},
            }
        },
    )
    assert await order.create() == {"orderId": 1}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_post_body(ctx):
    echo = ctx.create("Echo", {"send": {"url": "api/echo", "method": "POST", "data": {"a": 1}}})
    assert await echo.send(b=2) == {"a": 1, "b": 2}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_error_by_timeout(ctx):
    order = ctx.create(
        "Order", {"create": {"url": "api/timeout", "method": "POST", "timeout": 300}}
    )
    with pytest.raises(RequestTimeoutError) as exc_info:
        await order.create()
    assert exc_info.value.timeout is True


@pytest.mark.integration
@pytest.mark.asyncio
@pytest.mark.parametrize("status", [500, 404])
async def test_error_status(ctx, status):
    order = ctx.create("Order", {"create": {"url": f"api/{status}", "method": "POST"}})
    with pytest.raises(TransportError) as exc_info:
        await order.create()
    assert exc_info.value.status == status


@pytest.mark.integration
@pytest.mark.asyncio
async def test_unreachable_server_has_status_zero(closed_url):
    order = Context(url_prefix=closed_url, mock=False).create(
        "Order", {"create": {"url": "api/order-create", "method": "POST"}}
    )
    with pytest.raises(TransportError) as exc_info:
        await order.create()
    assert exc_info.value.status == 0
    assert exc_info.value.timeout is False


@pytest.mark.integration
@pytest.mark.asyncio
async def test_jsonp_auto_detect(ctx):
    order = ctx.create("Order", {"create": {"url": "api/order-create.jsonp"}})
    assert await order.create() == {"id": 1}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_jsonp_custom_callback(ctx):
    order = ctx.create(
        "Order",
        {"create": {"url": "api/order-create.jsonp", "jsonp": [True, "cb", "j{id}"]}},
    )
    assert await order.create() == {"id": 1}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_envelope_error_from_jsonp(ctx):
    order = ctx.create(
        "Order",
        {
            "create": {
                "url": "api/order-create.jsonp",
                "fit": lambda response: {"success": False, "content": response},
            }
        },
    )
    with pytest.raises(EnvelopeError):
        await order.create()
