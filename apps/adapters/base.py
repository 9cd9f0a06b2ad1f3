"""
Base adapter class for all measurement providers.
"""
import logging
import time
from abc import ABC, abstractmethod
from typing import Dict, Optional

import requests
from django.conf import settings
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from apps.core.exceptions import ProviderUnreachable

logger = logging.getLogger(__name__)


class BaseAdapter(ABC):
    """
    Abstract base class for measurement provider adapters.
    Provides the shared HTTP session, timing and error translation.
    """

    # Subclasses must define these
    SOURCE_NAME = None
    URL_SETTING = None
    CURRENT_FIELDS = ()

    def __init__(self, session: Optional[requests.Session] = None):
        if not all([self.SOURCE_NAME, self.URL_SETTING]):
            raise ValueError("Adapter must define SOURCE_NAME and URL_SETTING")

        self.settings = settings.ENVIRONMENT_QUALITY_SETTINGS
        self.api_url = self.settings[self.URL_SETTING]
        self.session = session or self._create_session()

    def _create_session(self) -> requests.Session:
        """
        Create requests session.

        Transport retries are disabled: a failed lookup surfaces at once and
        the next location selection is the only retry.
        """
        session = requests.Session()

        adapter = HTTPAdapter(max_retries=Retry(total=0))
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        return session

    def _make_request(self, params: Dict) -> Dict:
        """
        Make a GET request against the provider URL.

        Args:
            params: Query parameters

        Returns:
            Decoded JSON body

        Raises:
            ProviderUnreachable: on transport errors, HTTP errors or a non-JSON body
        """
        start_time = time.time()

        try:
            response = self.session.get(
                self.api_url,
                params=params,
                timeout=self.settings.get('REQUEST_TIMEOUT', 10),
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"{self.SOURCE_NAME} API error: {e}")
            raise ProviderUnreachable(self.SOURCE_NAME, str(e)) from e
        except ValueError as e:
            logger.error(f"{self.SOURCE_NAME} returned a non-JSON body: {e}")
            raise ProviderUnreachable(self.SOURCE_NAME, "invalid JSON response") from e

        response_time_ms = int((time.time() - start_time) * 1000)
        logger.debug(f"{self.SOURCE_NAME} responded in {response_time_ms} ms")

        return data

    def build_params(self, lat: float, lng: float) -> Dict:
        return {
            'latitude': lat,
            'longitude': lng,
            'current': ",".join(self.CURRENT_FIELDS),
            'timezone': 'auto',
        }

    @abstractmethod
    def fetch_current(self, lat: float, lng: float) -> Dict:
        """
        Fetch the raw `current` observation payload for coordinates.

        Args:
            lat: Latitude
            lng: Longitude

        Returns:
            Decoded provider response
        """
