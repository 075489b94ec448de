# casper-sdk

A small Python client library for talking to nodes of a Casper network.

It covers three areas:

- **Currency**: convert motes to CSPR with exact decimal arithmetic.
- **JSON-RPC**: query blocks, deploys, accounts, auction state and global state,
  and submit deploys.
- **Event streams**: read a node's server-sent events, sort them by type and pass
  them to your handlers.

## Installation

```
pip install .
```

The library uses only the standard library. To run the tests, install the
`test` extra:

```
pip install ".[test]"
pytest
```

## Currency

```python
from casper_sdk.currency import motes_to_cspr

motes_to_cspr(2_500_000_000)   # Decimal('2.5')
motes_to_cspr(None)            # Decimal('0')
```

One CSPR is 1,000,000,000 motes. A negative amount raises `ValueError`.

## JSON-RPC client

`RpcClient` builds the requests. A handler sends them. `HttpHandler` sends them
over HTTP POST to a node's RPC endpoint; it takes an optional `urllib` opener
and a `timeout` in seconds.

```python
from casper_sdk.http_handler import HttpHandler
from casper_sdk.rpc_client import RpcClient

client = RpcClient(HttpHandler("http://localhost:7777/rpc", timeout=30))

status = client.get_status()
print(status.chainspec_name, status.build_version)

latest = client.get_block_latest()
print(latest.block.header.height)

block = client.get_block_by_height(1000)
deploy = client.get_deploy("<deploy hash>")
```

Results are dataclasses from `casper_sdk.rpc_response`; blocks, accounts and
auction state use the dataclasses in `casper_sdk.entities`. Any object with a
`process_call(request)` method that returns an `RpcResponse` can stand in for
`HttpHandler`.

Methods that take a `state_root_hash` accept `None`. In that case the client
first asks the node for the latest state root hash:

```python
balance = client.get_account_balance(None, "uref-...-007")
print(balance.balance_value)
```

Some calls fail. Each failure raises an exception from `casper_sdk.rpc_errors`:

- `RpcError` means the node answered with a JSON-RPC error object. It carries
  `code` and `message`.
- `HttpError` means the HTTP status was not 2xx. Call `is_not_found()` to test
  for a 404.
- `HandlerError` is the parent of the transport and decoding errors, for example
  `ProcessHttpRequestError` and `RpcResponseUnmarshalError`.
- `ResultUnmarshalError` means the result could not be decoded.

```python
from casper_sdk.rpc_errors import HttpError, RpcError

try:
    client.get_block_by_hash("00" * 32)
except RpcError as err:
    print(err.code, err.message)
except HttpError as err:
    if err.is_not_found():
        print("wrong endpoint")
```

### Request ids

Requests carry the id `"1"` by default. To use your own id, set it for a block
of calls:

```python
from casper_sdk.rpc_request import request_id_context

with request_id_context(42):
    client.get_peers()
```

## Event stream

`SseClient` connects to a node's event endpoint and reads the stream. It hands
each event, a `RawEvent`, to the handler registered for its type. Middleware
wraps every handler registered after it; the first one registered runs first.

```python
from casper_sdk.sse_client import SseClient
from casper_sdk.sse_events import EventType

client = SseClient("http://localhost:9999/events/main")

def log_calls(handler):
    def wrapped(event):
        print("event", event.event_id)
        return handler(event)
    return wrapped

client.register_middleware(log_calls)

def on_block(event):
    added = event.parse_as_block_added_event()
    print(added.block_hash, added.block.header.height)

client.register_handler(EventType.BLOCK_ADDED, on_block)

try:
    client.start(0)   # pass a non-zero event id to resume from it
finally:
    client.stop()
```

`start` blocks until the stream ends or something fails, and then raises the
error. Set `workers_count` to run several handler threads; inside a handler,
`casper_sdk.sse_client.WORKER_ID` holds the worker's number. Handler errors do
not stop the stream; they go to `consumer_error_handler`, and frames that cannot
be parsed go to `stream_error_handler`. Both default to logging, and both can be
replaced with a function that reads from a `queue.Queue` until it gets `None`.

You can also use the parts directly:

- `EventStreamReader` splits a byte stream into event blocks.
- `EventParser` turns a block into a `RawEvent`.
- `HttpConnection` opens the stream over HTTP.
- `Streamer` and `Consumer` run the reading side and the handling side.

## What this package does not do

Deploys are plain JSON-shaped dictionaries: the package does not build, sign or
hash deploys, does not handle key pairs, and does not encode or decode CL values.
`put_deploy` sends whatever deploy dictionary it is given. Parsed events and
results keep deploys, execution results and stored values as dictionaries.