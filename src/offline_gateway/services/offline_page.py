"""Offline fallback page.

A self-contained HTML document (inline styles and script, no external
assets) returned for navigations when neither the network nor the cache can
answer. It is rendered fresh on every call and never stored.
"""

import html
from string import Template

from offline_gateway.entities import GatewayResponse

OFFLINE_PAGE_TEMPLATE = Template(
    """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Offline - $app_name</title>
    <style>
        body {
            font-family: 'Inter', -apple-system, BlinkMacSystemFont, sans-serif;
            margin: 0;
            padding: 2rem;
            background: #f9fafb;
            color: #374151;
            text-align: center;
            min-height: 100vh;
            display: flex;
            flex-direction: column;
            justify-content: center;
            align-items: center;
        }
        .offline-container {
            max-width: 500px;
            background: #ffffff;
            padding: 3rem;
            border-radius: 12px;
            box-shadow: 0 4px 6px -1px rgba(0, 0, 0, 0.1);
        }
        h1 {
            color: #6366f1;
            font-size: 1.875rem;
            font-weight: 600;
        }
        p {
            margin-bottom: 1.5rem;
            line-height: 1.6;
        }
        .retry-button {
            background: #6366f1;
            color: #ffffff;
            border: none;
            padding: 0.75rem 1.5rem;
            border-radius: 8px;
            font-size: 1rem;
            cursor: pointer;
        }
        .retry-button:hover {
            background: #4f46e5;
        }
    </style>
</head>
<body>
    <main class="offline-container">
        <h1 id="offlineTitle">You're Offline</h1>
        <p id="offlineMessage">
            It looks like you're not connected to the internet.
            $app_name works best online, but previously visited pages are still available.
        </p>
        <p>
            <strong>Tips:</strong><br>
            Check your internet connection<br>
            Try again once you are back online<br>
            Responses you already submitted are saved
        </p>
        <button class="retry-button" type="button" onclick="window.location.reload()">Try Again</button>
    </main>
    <script>
        window.addEventListener('online', function () {
            window.location.reload();
        });

        if (navigator.onLine) {
            document.getElementById('offlineTitle').textContent = 'Connection Restored';
            document.getElementById('offlineMessage').innerHTML =
                'You are back online. <a href="/" style="color: #6366f1;">Return to the app</a>';
        }
    </script>
</body>
</html>
"""
)

OFFLINE_CONTENT_TYPE = "text/html; charset=utf-8"


def render_offline_page(app_name: str) -> str:
    """Render the offline page for an application name."""
    return OFFLINE_PAGE_TEMPLATE.substitute(app_name=html.escape(app_name or "This app"))


def offline_response(app_name: str) -> GatewayResponse:
    """Build a 200 response carrying the offline page."""
    return GatewayResponse(
        status=200,
        reason="OK",
        headers={"Content-Type": OFFLINE_CONTENT_TYPE, "Cache-Control": "no-store"},
        body=render_offline_page(app_name).encode("utf-8"),
    )
