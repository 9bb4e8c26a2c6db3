"""
Clients HTTP externes.

- GoogleTranslateClient : service de traduction amont du proxy /api/translate
- TranslateProxyClient : client du proxy /api/translate
- KVProxyClient : client du proxy /api/db

Infrastructure partagee:
- RateLimitError / throttle_retry / send_with_retry : relance sur 429 (traduction uniquement)
"""

from letzview.adapters.api.google_translate import GoogleTranslateClient
from letzview.adapters.api.kv_client import KVProxyClient
from letzview.adapters.api.retry import RateLimitError, send_with_retry, throttle_retry
from letzview.adapters.api.translate_client import TranslateProxyClient

__all__ = [
    "GoogleTranslateClient",
    "KVProxyClient",
    "RateLimitError",
    "TranslateProxyClient",
    "send_with_retry",
    "throttle_retry",
]
