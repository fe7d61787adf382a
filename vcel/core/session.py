"""Authenticated session to a vCenter endpoint."""

from http.client import HTTPException
from typing import Any, Callable, List, Optional

from pyVim.connect import Disconnect, SmartConnect
from pyVmomi import vim, vmodl

from ..config.config import EndpointURL
from ..io.logger import get_logger
from .exceptions import DatacenterNotFoundError, RemoteError, SessionError

logger = get_logger("session")

# API faults, socket and TLS failures (OSError), and HTTP replies the SOAP
# stub rejects (non-200/500 status, truncated body)
REMOTE_ERRORS = (vmodl.MethodFault, OSError, HTTPException)


def describe_fault(error: Exception) -> str:
    """Prefer the server's fault message over the exception repr."""
    message = getattr(error, "msg", None)
    if isinstance(message, str) and message:
        return message
    return str(error) or type(error).__name__


class VSphereSession:
    """Owns the service instance for the lifetime of the process.

    ``connect`` and ``disconnect`` default to the SDK's
    ``SmartConnect``/``Disconnect`` and are replaceable in tests.
    """

    def __init__(
        self,
        endpoint: EndpointURL,
        insecure: bool = False,
        connect: Callable[..., Any] = SmartConnect,
        disconnect: Callable[[Any], None] = Disconnect,
    ):
        self.endpoint = endpoint
        self.insecure = insecure
        self._connect = connect
        self._disconnect = disconnect
        self.service_instance: Optional[Any] = None
        self._content: Optional[Any] = None

    @property
    def connected(self) -> bool:
        return self.service_instance is not None

    def open(self) -> "VSphereSession":
        """Log in to the endpoint."""
        logger.info(f"Connecting to {self.endpoint} (insecure={self.insecure})")
        try:
            self.service_instance = self._connect(
                protocol=self.endpoint.protocol,
                host=self.endpoint.host,
                port=self.endpoint.port,
                path=self.endpoint.path,
                user=self.endpoint.username,
                pwd=self.endpoint.password,
                disableSslCertValidation=self.insecure,
            )
        except REMOTE_ERRORS as e:
            raise SessionError(self.endpoint.host, describe_fault(e)) from e

        if self.service_instance is None:
            raise SessionError(self.endpoint.host, "no service instance returned")
        return self

    @property
    def content(self) -> Any:
        if self.service_instance is None:
            raise SessionError(self.endpoint.host, "session is not open")
        if self._content is None:
            self._content = self.service_instance.RetrieveContent()
        return self._content

    @property
    def event_manager(self) -> Any:
        return self.content.eventManager

    def list_datacenters(self) -> List[Any]:
        """All datacenters in the inventory, including those inside folders."""
        content = self.content
        try:
            view = content.viewManager.CreateContainerView(
                content.rootFolder, [vim.Datacenter], True
            )
        except REMOTE_ERRORS as e:
            raise RemoteError(f"datacenter lookup failed: {describe_fault(e)}") from e
        try:
            return list(view.view)
        finally:
            view.Destroy()

    def find_datacenter(self, name: str = "") -> Any:
        """Return the named datacenter, or the only one when ``name`` is empty."""
        datacenters = self.list_datacenters()
        if name:
            for datacenter in datacenters:
                if datacenter.name == name:
                    return datacenter
            raise DatacenterNotFoundError(name)

        if len(datacenters) == 1:
            return datacenters[0]
        raise DatacenterNotFoundError(candidates=[dc.name for dc in datacenters])

    def close(self) -> None:
        """Log out. Safe to call more than once."""
        if self.service_instance is None:
            return
        service_instance, self.service_instance = self.service_instance, None
        self._content = None
        try:
            self._disconnect(service_instance)
        except REMOTE_ERRORS as e:
            logger.warning(f"Logout from {self.endpoint.host} failed: {describe_fault(e)}")
