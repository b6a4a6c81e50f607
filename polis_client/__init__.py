"""Client library for the Polis university-management backend."""

from polis_client.controllers.list_controller import ListController, ListState
from polis_client.gateway import ApiGateway

__version__ = "0.1.0"

__all__ = ["ApiGateway", "ListController", "ListState", "__version__"]
