from polis_client.api.client import ApiClient

__all__ = ["ApiClient"]
