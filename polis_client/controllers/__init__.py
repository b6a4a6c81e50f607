from polis_client.controllers.list_controller import ListController, ListState

__all__ = ["ListController", "ListState"]
