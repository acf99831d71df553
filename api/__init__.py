"""HTTP API endpoints (aiohttp.web) next to the Telegram webhook."""
