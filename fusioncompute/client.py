import logging
import warnings

import requests
from urllib3.exceptions import InsecureRequestWarning

from .decoder import decode_response, is_success
from .errors import AuthenticationError, TransportError
from .models import SiteListResponse
from .sites import Site
from .vm import VmManager

logger = logging.getLogger(__name__)


class FusionComputeClient:
    """
    Session-token HTTP client for the FusionCompute REST API.

    Login posts the credentials as X-Auth-* headers to /service/session and
    reuses the returned X-Auth-Token on every later request.
    """

    SESSION_ENDPOINT = "/service/session"
    SITES_ENDPOINT = "/service/sites"
    DEFAULT_TIMEOUT = 30
    DEFAULT_API_VERSION = "6.3"

    def __init__(
        self,
        base_url=None,
        username=None,
        password=None,
        api_version=None,
        user_type="2",
        auth_type="0",
        verify_ssl=True,
        request_timeout=None,
    ):
        logger.debug(f"Initializing FusionCompute connection to: {base_url}")
        self.base_url = base_url.rstrip("/") if base_url else base_url
        self.username = username
        self.password = password
        self.api_version = api_version or self.DEFAULT_API_VERSION
        self.user_type = str(user_type)
        self.auth_type = str(auth_type)
        self.verify_ssl = bool(verify_ssl)
        self.request_timeout = request_timeout or self.DEFAULT_TIMEOUT
        self.token = None

        if not self.base_url:
            raise ValueError("Missing required configuration: FusionCompute base URL")
        if not all([self.username, self.password]):
            raise ValueError("Missing credentials. Provide FC_USERNAME + FC_PASSWORD")

        if not self.verify_ssl:
            # Suppress only the InsecureRequestWarning
            warnings.simplefilter("ignore", InsecureRequestWarning)

        self.session = requests.Session()
        self.session.headers.update(
            {
                "Accept": f"application/json;version={self.api_version};charset=UTF-8",
                "Accept-Language": "zh_CN:1.0",
                "Content-Type": "application/json; charset=UTF-8",
            }
        )
        self.sites = {}

    @classmethod
    def from_config(cls, config):
        """Build a client from the ``FUSIONCOMPUTE`` section of the runtime config."""
        fc_cfg = config.get("FUSIONCOMPUTE", config)
        return cls(
            base_url=fc_cfg.get("URL"),
            username=fc_cfg.get("USERNAME"),
            password=fc_cfg.get("PASSWORD"),
            api_version=fc_cfg.get("API_VERSION"),
            user_type=fc_cfg.get("USER_TYPE", "2"),
            auth_type=fc_cfg.get("AUTH_TYPE", "0"),
            verify_ssl=fc_cfg.get("VERIFY_SSL", True),
            request_timeout=fc_cfg.get("REQUEST_TIMEOUT"),
        )

    def __enter__(self):
        self.login()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        try:
            self.logout()
        except TransportError as err:
            if exc_type is None:
                raise
            logger.warning(f"Logout failed while handling {exc_type.__name__}: {err}")

    def _build_url(self, path):
        if path.startswith("http://") or path.startswith("https://"):
            return path
        normalized = path if path.startswith("/") else f"/{path}"
        return f"{self.base_url}{normalized}"

    def login(self):
        """Open a session and keep its token on the HTTP session."""
        url = self._build_url(self.SESSION_ENDPOINT)
        headers = {
            "X-Auth-User": self.username,
            "X-Auth-Key": self.password,
            "X-Auth-UserType": self.user_type,
            "X-Auth-AuthType": self.auth_type,
        }
        logger.debug(f"Logging in to FusionCompute at {url} as {self.username}")
        try:
            response = self.session.post(
                url,
                headers=headers,
                verify=self.verify_ssl,
                timeout=self.request_timeout,
            )
        except requests.exceptions.RequestException as err:
            logger.error(f"Login request exception: {err}")
            raise TransportError(f"Login request to {url} failed: {err}") from err

        if not is_success(response.status_code):
            logger.error(f"Login failed with status {response.status_code}")
            raise AuthenticationError(
                f"FusionCompute login failed (status={response.status_code}): {response.text}"
            )

        token = response.headers.get("X-Auth-Token")
        if not token:
            logger.error("Login succeeded but no X-Auth-Token header was returned.")
            raise AuthenticationError("FusionCompute login returned no X-Auth-Token header")

        self.token = token
        self.session.headers["X-Auth-Token"] = token
        logger.info(f"Logged in to FusionCompute at {self.base_url}.")

    def logout(self):
        """Close the session. Safe to call when not logged in."""
        if not self.token:
            return
        try:
            response = self.request("DELETE", self.SESSION_ENDPOINT)
        finally:
            self.token = None
            self.session.headers.pop("X-Auth-Token", None)
        if not is_success(response.status_code):
            logger.warning(
                f"Logout from FusionCompute at {self.base_url} returned status {response.status_code}; "
                f"session token dropped locally."
            )
            return
        logger.info(f"Logged out of FusionCompute at {self.base_url}.")

    def request(self, method, path, params=None, body=None):
        """
        Issue one HTTP request and return the raw ``requests.Response``.

        Status codes are not interpreted here; callers decode the response.
        Transport failures raise :class:`TransportError`.
        """
        url = self._build_url(path)
        method_upper = method.upper()
        logger.debug(f"Making {method_upper} request to: {url}")

        request_kwargs = {
            "verify": self.verify_ssl,
            "timeout": self.request_timeout,
            "params": params,
        }
        if body is not None:
            request_kwargs["json"] = body

        try:
            response = self.session.request(method_upper, url, **request_kwargs)
        except requests.exceptions.RequestException as err:
            logger.error(f"Request exception: {err}")
            logger.debug(f"Request failed: {method_upper} {url}", exc_info=True)
            raise TransportError(f"{method_upper} {url} failed: {err}") from err

        logger.debug(f"Response status code: {response.status_code}")
        return response

    def get_sites(self) -> dict:
        """Fetch the sites managed by this FusionCompute and cache them by name."""
        logger.debug(f"Fetching sites from FusionCompute at {self.base_url}")
        response = self.request("GET", self.SITES_ENDPOINT)
        listing = decode_response(response, SiteListResponse, "GET", self.SITES_ENDPOINT)

        site_dict = {}
        for item in listing.sites:
            site_obj = Site(self, item)
            site_dict[site_obj.name] = site_obj
        self.sites = site_dict
        logger.debug(f"Found {len(self.sites)} sites on FusionCompute")
        return self.sites

    def site(self, name):
        """Get a single site by name, URI or URN."""
        if not self.sites:
            self.get_sites()
        site = self.sites.get(name)
        if site:
            return site
        for site_obj in self.sites.values():
            if name in {site_obj.name, site_obj.uri, site_obj.urn}:
                return site_obj
        return None

    def __getitem__(self, name):
        """Shortcut for accessing a site."""
        return self.site(name)

    def vm_manager(self, site):
        """
        Return a VmManager for ``site``.

        A site URI (``/service/sites/<id>``) is used as-is; anything else is
        looked up by name or URN.
        """
        if isinstance(site, str) and site.startswith(f"{self.SITES_ENDPOINT}/"):
            return VmManager(self, site)
        site_obj = self.site(site)
        if site_obj is None:
            raise ValueError(f"FusionCompute site '{site}' was not found.")
        return site_obj.vm
