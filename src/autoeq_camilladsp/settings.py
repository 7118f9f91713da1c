"""
Runtime settings: where the AutoEq results live and how to fetch them.

Defaults point at the public AutoEq repository on GitHub. Each value can be
overridden from the environment (AUTOEQ_BASE_URL, AUTOEQ_RESULTS_PATH,
AUTOEQ_RAW_BASE_URL, AUTOEQ_USER_AGENT, AUTOEQ_TIMEOUT).
"""

import os
from dataclasses import dataclass

from .errors import SettingsError


@dataclass
class Settings:
    base_url: str = "https://github.com"
    results_path: str = "/jaakkopasanen/AutoEq/blob/master/results"
    raw_base_url: str = "https://raw.githubusercontent.com"
    user_agent: str = "autoeq_camilladsp"
    timeout: int = 30

    @classmethod
    def from_env(cls) -> 'Settings':
        defaults = cls()
        timeout = os.getenv("AUTOEQ_TIMEOUT")
        if timeout and not timeout.strip().isdigit():
            raise SettingsError(f"AUTOEQ_TIMEOUT must be a whole number of seconds, got {timeout!r}")
        return cls(
            base_url=os.getenv("AUTOEQ_BASE_URL", defaults.base_url),
            results_path=os.getenv("AUTOEQ_RESULTS_PATH", defaults.results_path),
            raw_base_url=os.getenv("AUTOEQ_RAW_BASE_URL", defaults.raw_base_url),
            user_agent=os.getenv("AUTOEQ_USER_AGENT", defaults.user_agent),
            timeout=int(timeout) if timeout else defaults.timeout,
        )

    def repo_url(self) -> str:
        """Results overview page listing every headphone"""
        return self.base_url.rstrip('/') + self.results_path

    def headphone_url(self, headphone_path: str) -> str:
        """Absolute URL for a catalog link (usually site-relative)"""
        if headphone_path.startswith(('http://', 'https://')):
            return headphone_path
        return self.base_url.rstrip('/') + '/' + headphone_path.lstrip('/')

    def raw_url(self, blob_path: str) -> str:
        """Raw file URL for a '/<owner>/<repo>/blob/<ref>/<file>' link"""
        if blob_path.startswith(self.base_url):
            blob_path = blob_path[len(self.base_url.rstrip('/')):]
        return self.raw_base_url.rstrip('/') + blob_path.replace('/blob', '', 1)
