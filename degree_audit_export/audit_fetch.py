"""
Capture a Degree Works audit: open a browser for the user to sign in and
load their audit, then read the rendered page and return its HTML.
"""
from __future__ import annotations

from datetime import datetime, timezone

from selenium import webdriver
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from webdriver_manager.chrome import ChromeDriverManager

# Any of these in the page source means an audit has been rendered.
_AUDIT_MARKERS = ("Degree Works", "Academic Progress Report", "MuiPaper-root")


def looks_like_audit(html: str) -> bool:
    return any(marker in html for marker in _AUDIT_MARKERS)


def fetch_audit_html(url: str) -> dict:
    """
    Open Chrome on ``url``. The user signs in and waits for the audit to
    load, then presses Enter in the terminal.

    Returns {"title", "url", "html", "timestamp"} for the current page.
    """
    options = Options()
    options.add_argument("--no-sandbox")
    options.add_argument("--disable-dev-shm-usage")
    options.add_argument("--window-size=1200,900")
    try:
        service = Service(ChromeDriverManager().install())
        driver = webdriver.Chrome(service=service, options=options)
    except Exception as e:
        raise RuntimeError(
            f"Could not start Chrome for Degree Works. Install Chrome and run again. Error: {e}"
        ) from e

    try:
        driver.get(url)
        driver.implicitly_wait(5)

        print()
        print("In the browser window:")
        print("  1. Sign in to Degree Works")
        print("  2. Open your audit (worksheet) and wait for it to finish loading")
        print("  3. Come back to this terminal and press Enter")
        print()
        input("Press Enter when the audit is on screen -> ")

        html = driver.execute_script("return document.documentElement.outerHTML;") or driver.page_source
        if not looks_like_audit(html):
            raise ValueError(
                "The current page does not look like a Degree Works audit. "
                "Open the audit in the browser first, then press Enter."
            )
        return {
            "title": driver.title or "Untitled",
            "url": driver.current_url,
            "html": html,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
    finally:
        driver.quit()
