"""
Chat Executor - Runs one (resource, operation) over every input record.

Per run:
  - resource and operation are resolved once, at item 0
  - for getAll operations, returnAll is also resolved once at item 0 and
    applies to every item, even if later items override it

Per item i (strictly in order, one request in flight at a time):
  1. Build the request from item i's parameters
  2. Call the transport (paging through results when returnAll is set)
  3. Hand the result to the OutputAggregator

A failing item (InvalidInput or TransportError) either becomes
{"error": message} and the run continues, or is re-raised and the run
aborts, depending on the continue-on-fail policy.
"""

from typing import Any, Callable, List, Optional, Sequence, Union

from .exceptions import InvalidInput, TransportError
from .output_aggregator import OutputAggregator
from .pagination import fetch_all_pages, fetch_single_page
from .request_builder import ResolvedParams, build, is_paged


class ChatExecutor:
    """Per-item execution loop.

    Attributes:
        transport: Object with request(method, path, body, query).
        parameters: Object with get_param(name, index).
        continue_on_fail: bool, or a zero-argument callable read on each failure.
        debug: If True, print a line per item.
    """

    def __init__(
        self,
        transport,
        parameters,
        continue_on_fail: Union[bool, Callable[[], bool]] = False,
        debug: bool = False,
    ):
        self.transport = transport
        self.parameters = parameters
        self.continue_on_fail = continue_on_fail
        self.debug = debug
        self.failures = 0

    def run(self, input_records: Sequence[Any]) -> List[Any]:
        """Process every input record and return the flattened output.

        Raises:
            InvalidInput, TransportError: On the first failing item when
                continue-on-fail is disabled. No output is returned.
        """
        output = OutputAggregator()
        self.failures = 0

        resource = self.parameters.get_param("resource", 0)
        operation = self.parameters.get_param("operation", 0)
        return_all = None
        if is_paged(resource, operation):
            return_all = bool(self.parameters.get_param("returnAll", 0))

        if self.debug:
            print(f"  Running {resource}:{operation} over {len(input_records)} item(s)")

        for i in range(len(input_records)):
            try:
                result = self.execute_item(resource, operation, i, return_all)
            except (InvalidInput, TransportError) as e:
                if self._should_continue():
                    self.failures += 1
                    if self.debug:
                        print(f"  Item {i} failed, continuing: {e}")
                    output.append({"error": str(e)})
                    continue
                raise

            added = output.append(result)
            if self.debug:
                print(f"  Item {i}: {added} result(s)")

        return output.items

    def execute_item(
        self,
        resource: str,
        operation: str,
        index: int,
        return_all: Optional[bool] = None,
    ) -> Any:
        """Run one item. Returns None when the pair has no route."""
        pinned = {} if return_all is None else {"returnAll": return_all}
        params = ResolvedParams(self.parameters.get_param, index, pinned)

        spec = build(resource, operation, params)
        if spec is None:
            return None

        if spec.list_key and return_all:
            return fetch_all_pages(self.transport, spec, self.debug)
        if spec.list_key:
            return fetch_single_page(self.transport, spec)
        return self.transport.request(spec.method, spec.path, spec.body, spec.query)

    def _should_continue(self) -> bool:
        if callable(self.continue_on_fail):
            return bool(self.continue_on_fail())
        return bool(self.continue_on_fail)
