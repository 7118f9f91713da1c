"""
Pytest configuration and shared fixtures
"""

import pytest

from autoeq_camilladsp import CorrectionFilterSet, Peaking


@pytest.fixture
def sample_eq_text():
    """ParametricEQ.txt as published by AutoEq"""
    return (
        "Preamp: -6.9 dB\n"
        "Filter 1: ON PK Fc 105 Hz Gain -2.9 dB Q 0.70\n"
        "Filter 2: ON PK Fc 2274 Hz Gain 5.2 dB Q 2.13\n"
        "Filter 3: ON PK Fc 4531 Hz Gain -3.6 dB Q 3.05\n"
        "Filter 4: ON PK Fc 19 Hz Gain 6.4 dB Q 0.34\n"
    )


@pytest.fixture
def sample_correction():
    return CorrectionFilterSet(
        gain=-6.9,
        eq_bands=(
            Peaking(freq=105.0, q=0.70, gain=-2.9),
            Peaking(freq=2274.0, q=2.13, gain=5.2),
            Peaking(freq=4531.0, q=3.05, gain=-3.6),
        ),
    )


@pytest.fixture
def sample_catalog():
    """Catalog as produced by the link scraper (lower-cased names)"""
    return {
        "sony wh-1000xm4": "/jaakkopasanen/AutoEq/tree/master/results/oratory1990/over-ear/Sony%20WH-1000XM4",
        "sony mdr-7506": "/jaakkopasanen/AutoEq/tree/master/results/oratory1990/over-ear/Sony%20MDR-7506",
        "beyerdynamic dt770": "/jaakkopasanen/AutoEq/tree/master/results/oratory1990/over-ear/Beyerdynamic%20DT770",
    }


@pytest.fixture
def sample_results_html():
    """Trimmed GitHub directory listing of AutoEq results"""
    return """
    <html>
    <body>
    <a href="#">Skip to content</a>
    <a href="/jaakkopasanen"><img src="avatar.png" alt=""></a>
    <ul>
    <li><a href="/jaakkopasanen/AutoEq/tree/master/results/oratory1990/over-ear/Sony%20WH-1000XM4">Sony WH-1000XM4</a></li>
    <li><a href="/jaakkopasanen/AutoEq/tree/master/results/oratory1990/over-ear/AKG%20K371">  AKG K371  </a></li>
    <li><a href="/jaakkopasanen/AutoEq/tree/master/results/crinacle/AT%26T">AT&amp;T Earbuds</a></li>
    </ul>
    </body>
    </html>
    """


class FakeResponse:
    def __init__(self, text, status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        import requests
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """Stands in for requests.Session; serves canned pages by URL"""

    def __init__(self, pages):
        self.pages = pages
        self.headers = {}
        self.requested = []

    def get(self, url, timeout=None):
        self.requested.append(url)
        if url not in self.pages:
            return FakeResponse("Not Found", status_code=404)
        return FakeResponse(self.pages[url])


@pytest.fixture
def fake_session_factory():
    return FakeSession
