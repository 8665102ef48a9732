# aztfresolve

Some Azure resource IDs match more than one Terraform `azurerm` resource type. A
`Microsoft.Compute/virtualMachines` ID, for example, can be `azurerm_linux_virtual_machine`,
`azurerm_windows_virtual_machine` or `azurerm_virtual_machine`. `aztfresolve` decides which type
applies. It reads the resource from the Azure Resource Manager API and looks at its kind, SKU or
properties.

## Installation

```
pip install aztfresolve
```

The package has no runtime dependencies.

## Usage

First parse the resource ID. Then check whether resolving it needs an API call:

```python
from aztfresolve.resource_id import parse_resource_id
from aztfresolve.registry import needs_api, resolve

rid = parse_resource_id(
    "/subscriptions/00000000-0000-0000-0000-000000000000"
    "/resourceGroups/rg/providers/Microsoft.Compute/virtualMachines/vm1"
)
print(needs_api(rid))  # True
```

`parse_resource_id` raises `ValueError` if the ID is malformed. The returned `ResourceId` offers
these methods:

* `names()`
* `types()`
* `parent()`
* `parent_scope()`
* `root_scope()`
* `route_scope_string()`
* `scope_string()`

`str(rid)` gives the ID back as a path.

### Resolving

`resolve(resource_id, client)` takes a client, which is any object with a
`get(resource_id, api_version)` method that returns the decoded JSON body of the resource.
`aztfresolve.client.ArmClient` is such a client, built on `urllib`:

```python
from aztfresolve.client import ArmClient

client = ArmClient(endpoint, "token")  # endpoint: base URL of the management API
print(resolve(rid, client))  # e.g. "azurerm_linux_virtual_machine"
```

`ArmClient` takes these arguments:

* `credential` is a bearer token string, or a callable that returns one.
* `transport` is optional. It is a callable `(url, headers) -> (status, body)` that replaces
  the default `urllib` request, for example in tests.
* `timeout` is optional.

If a request fails, `ArmClient.get` raises `aztfresolve.client.ArmError`. The error carries the
HTTP `status` and the ARM error `code` when those are known.

`resolve` raises `aztfresolve.base.ResolveError` in these cases:

* no resolver is registered for the ID;
* the response cannot be mapped to one type;
* the client raised `ArmError` (it is wrapped).

`get_resolver(resource_id)` returns the registered `aztfresolve.base.Resolver`, or `None` if
there is none. A `Resolver` holds the resolving function and the `resource_types` that the function
can produce. The full table is `aztfresolve.registry.RESOLVERS`. Its keys are the upper-cased
resource route and parent scope.

### Individual resolvers

You can also call each resolver function directly as `fn(client, resource_id)`. The functions are
grouped by service area in these modules:

* `compute`
* `appservice`
* `datafactory`
* `spring`
* `recovery`
* `machine_learning`
* `sentinel`
* `stream_analytics`
* `storage`
* `network`
* `monitor`
* `services`
* `automation`
* `data`

Two examples are `aztfresolve.compute.resolve_virtual_machine` and
`aztfresolve.network.resolve_cdn_profile`. A resolver called directly lets `ArmError` propagate
unwrapped.

## What it does not do

* It is a library only. It has no command-line tool.
* It does not acquire Azure credentials. You must supply a bearer token, or a callable that
  returns one.
* It only decides between candidate types for the resource types in the registry. It does not
  map an arbitrary resource ID to a Terraform type.

## Running the tests

```
pip install -e ".[test]"
pytest
```