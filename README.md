# radixroute

radixroute is a compact radix-tree router for URL paths. Routes are stored in a
prefix tree, and each node's children are ordered by how many routes pass
through them. A lookup returns the handlers registered for a path and the
values of the path's parameters. When nothing matches, it also says whether
the path would match with a trailing slash added or removed.

## Installation

```
pip install radixroute
```

## Route syntax

- `/static/path` matches exactly.
- `/user/:name` is a named parameter. It matches one path segment.
- `/src/*filepath` is a catch-all and may only end a path. It matches the rest
  of the path, including the leading `/`.

`Node.add_route` raises `radixroute.tree.RouteError` when a route conflicts
with the tree. Examples are a static segment registered beside a wildcard, two
wildcards in one segment, a wildcard with no name, a catch-all that is not at
the end of the path, and a path registered twice.

## Usage

```python
from radixroute.tree import Node

tree = Node()
tree.add_route("/", ["index"])
tree.add_route("/user/:name", ["show_user"])
tree.add_route("/src/*filepath", ["serve_file"])

handlers, params, tsr = tree.get_value("/user/gopher", None, False)
# handlers == ["show_user"]
# params.by_name("name") == "gopher"

handlers, params, tsr = tree.get_value("/user/gopher/", None, False)
# handlers is None and tsr is True: the route without the trailing slash exists

fixed, found = tree.find_case_insensitive_path("/USER/gopher", True)
# fixed == "/user/gopher", found is True
```

`get_value(path, params=None, unescape=False)` returns a
`(handlers, params, tsr)` tuple:

- `handlers` is the list that was registered for the route, or `None`.
- `params` is a `Params` list of `Param(key, value)` entries. Any entries you
  pass in come first.
- `tsr` recommends a redirect to the same path with the trailing slash added
  or removed.

When `unescape` is true, parameter values are decoded the way query strings
are: `%XX` escapes are decoded and `+` becomes a space. A value with a
malformed escape is returned unchanged.

`Params.get(name)` returns `(value, found)`. `Params.by_name(name)` returns
the value, or `""` when no parameter has that name.

`find_case_insensitive_path(path, fix_trailing_slash)` returns the path spelled
as it was registered, and whether it was found. When `fix_trailing_slash` is
true, the lookup also adds or removes a trailing slash where that makes the
path match.

`MethodTrees` is a list of `(method, root_node)` pairs.
`MethodTrees.get(method)` returns the root for that method, or `None`.

`count_params(path)` counts the `:` and `*` markers in a path, up to 255.

## Helpers

`radixroute.utils` provides:

- `join_paths(absolute, relative)` joins and cleans route prefixes and keeps a
  trailing slash from the relative part.
- `parse_accept(header)` returns the media types of an `Accept` header in
  order, without their parameters.
- `filter_flags(content)` returns a content type up to the first space or `;`.
- `last_char(text)` returns the last character. It raises `ValueError` for an
  empty string.
- `choose_data(custom, wildcard)` returns `custom`, or `wildcard` when `custom`
  is `None`. It raises `ValueError` when both are `None`.
- `name_of_function(func)` returns `module.qualname`.
- `resolve_address(*args)` returns its single argument. With no arguments it
  returns `:$PORT`, or `:8080` when `PORT` is unset or empty. It raises
  `ValueError` for more than one argument.
- `H` is a `dict` whose `to_xml()` renders it as a `<map>` element with one
  child element per key. It raises `ValueError` for a key that is not a valid
  XML name.
- `VERSION` is the version string `"v1.4.0-dev"`.

## What this package does not do

radixroute only matches paths against routes. It does not run an HTTP server
and does not serve requests. It has no per-request context, middleware chain,
route groups, static file serving or response rendering. Handlers are stored
and returned as given, and calling them is left to you. It issues no
redirects either: the trailing-slash hint and the case-corrected path are
returned for your code to act on.