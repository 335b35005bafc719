"""Base classes of the HTML clients.

A client gathers data from the frontend controllers into a ``View`` and
renders it with its Jinja2 templates. Clients can consist of sub-clients,
configured by name, which render parts of the parent's output:

    client = CheckoutStandard(Context.from_request(), View.from_request())
    client.init()      # process input, e.g. store posted values
    client.header()    # HTML for the page head
    client.body()      # HTML for the page body
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, List, Mapping, MutableMapping, Optional, Sequence

from flask import current_app, render_template, request, session, url_for

from shopfront.app.common.auth import current_account_id
from shopfront.app.common.errors import ConfigurationError


@dataclass
class Context:
    """Request scoped collaborators shared by a client and its sub-clients."""

    config: Mapping[str, Any]
    session: MutableMapping[str, Any]
    user_id: Optional[int] = None
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("shopfront"))

    @classmethod
    def from_request(cls) -> Context:
        return cls(
            config=current_app.config,
            session=session,
            user_id=current_account_id(),
            logger=current_app.logger,
        )


class View:
    """Attribute bag handed to the templates, plus request helpers."""

    def __init__(
        self,
        params: Optional[Mapping[str, Any]] = None,
        config: Optional[Mapping[str, Any]] = None,
        linker: Optional[Callable[..., str]] = None,
    ) -> None:
        self._params = params if params is not None else {}
        self._config = config if config is not None else {}
        self._linker = linker or url_for

    @classmethod
    def from_request(cls) -> View:
        return cls(params=request.values, config=current_app.config)

    def param(self, name: str, default: Any = None) -> Any:
        value = self._params.get(name)
        return default if value in (None, "") else value

    def params(self, prefix: str) -> Dict[str, Any]:
        """Return all parameters starting with ``prefix``, prefix removed."""
        return {k[len(prefix):]: v for k, v in self._params.items() if k.startswith(prefix)}

    def config(self, key: str, default: Any = None) -> Any:
        return self._config.get(key, default)

    def link(self, endpoint: str, **params: Any) -> str:
        return self._linker(endpoint, **params)

    def get(self, name: str, default: Any = None) -> Any:
        return self.__dict__.get(name, default)

    def values(self) -> Dict[str, Any]:
        return {k: v for k, v in self.__dict__.items() if not k.startswith("_")}


class HtmlClient:
    """Base of all HTML clients.

    Subclasses name their templates and may declare sub-clients. The names
    of the rendered sub-clients are read from ``subparts_key`` in the
    configuration, falling back to ``subparts``.
    """

    template_body: ClassVar[Optional[str]] = None
    template_header: ClassVar[Optional[str]] = None
    subparts_key: ClassVar[Optional[str]] = None
    subparts: ClassVar[Sequence[str]] = ()
    subpart_types: ClassVar[Mapping[str, type]] = {}

    def __init__(self, context: Context, view: Optional[View] = None, name: str = "") -> None:
        self._context = context
        self._view = view
        self._name = name
        self._clients: Optional[List[HtmlClient]] = None
        self._prepared: Optional[View] = None

    @property
    def name(self) -> str:
        return self._name

    def context(self) -> Context:
        return self._context

    def view(self) -> View:
        if self._view is None:
            raise ConfigurationError(f"No view available in {type(self).__name__}")
        return self._view

    def sub_client_names(self) -> List[str]:
        if self.subparts_key is None:
            return list(self.subparts)
        return list(self._context.config.get(self.subparts_key, self.subparts))

    def get_sub_client(self, name: str) -> HtmlClient:
        try:
            cls = self.subpart_types[name]
        except KeyError:
            raise ConfigurationError(
                f'Sub-client "{name}" not available in {type(self).__name__}'
            ) from None
        return cls(self._context, self._view, name)

    def sub_clients(self) -> List[HtmlClient]:
        if self._clients is None:
            self._clients = [self.get_sub_client(name) for name in self.sub_client_names()]
        return self._clients

    def init(self) -> None:
        """Processes the input, e.g. stores given values."""
        for client in self.sub_clients():
            client.init()

    def data(self, view: View) -> View:
        """Sets the values needed by the templates in the view."""
        for client in self.sub_clients():
            view = client.data(view)
        return view

    def _prepare(self) -> View:
        if self._prepared is None:
            self._prepared = self.data(self.view())
        return self._prepared

    def render_body(self, view: View) -> str:
        parts = {client.name: client.render_body(view) for client in self.sub_clients()}
        if not self.template_body:
            return "".join(parts.values())
        return render_template(self.template_body, view=view, parts=parts, **view.values())

    def render_header(self, view: View) -> str:
        parts = [client.render_header(view) for client in self.sub_clients()]
        if not self.template_header:
            return "".join(parts)
        return render_template(self.template_header, view=view, parts=parts, **view.values())

    def body(self) -> str:
        return self.render_body(self._prepare())

    def header(self) -> str:
        return self.render_header(self._prepare())
