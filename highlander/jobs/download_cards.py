"""
Download the Scryfall card snapshot.

Fetches the oracle-cards bulk file, drops cards that can never appear in a
deck, trims each record to the fields the checker reads and writes the
result to settings.card_cache_path.

Usage:
    python -m highlander.jobs.download_cards
"""

import asyncio
import json
import logging
import tempfile
from pathlib import Path
from typing import Any

import httpx

from highlander.config import settings
from highlander.parsers.scryfall import is_card_eligible, trim_card_data

logger = logging.getLogger(__name__)

# Bulk file is large; allow a generous read timeout
DOWNLOAD_TIMEOUT_SECONDS = 300.0


async def fetch_download_uri(client: httpx.AsyncClient) -> str:
    """
    Resolve the current download URI of the oracle-cards bulk file.

    Raises:
        ValueError: If the bulk data response has no download_uri
        httpx.HTTPError: If the request fails
    """
    response = await client.get(settings.scryfall_bulk_url)
    response.raise_for_status()
    download_uri = response.json().get("download_uri")
    if not download_uri:
        raise ValueError("Could not find oracle_cards bulk data URL")
    return str(download_uri)


async def download_bulk_file(client: httpx.AsyncClient, url: str, path: Path) -> None:
    """
    Stream the bulk file to disk, retrying on network errors.

    Raises:
        httpx.HTTPError: If the download still fails after all retries
    """
    max_retries = settings.fetch_max_retries
    for attempt in range(max_retries + 1):
        try:
            async with client.stream("GET", url, timeout=DOWNLOAD_TIMEOUT_SECONDS) as response:
                response.raise_for_status()
                with open(path, "wb") as f:
                    async for chunk in response.aiter_bytes(8192):
                        f.write(chunk)
            return
        except httpx.TransportError as e:
            if attempt >= max_retries:
                raise
            logger.warning(
                "Bulk download failed (attempt %d/%d): %s", attempt + 1, max_retries + 1, e
            )


def build_snapshot(raw_cards: list[Any]) -> list[dict[str, Any]]:
    """Keep eligible cards only, trimmed to the cached fields."""
    return [
        trim_card_data(card)
        for card in raw_cards
        if isinstance(card, dict) and is_card_eligible(card)
    ]


def write_snapshot(cards: list[dict[str, Any]], path: Path) -> None:
    """Write the snapshot atomically so readers never see a partial file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", dir=path.parent, suffix=".tmp", delete=False
    ) as f:
        json.dump(cards, f)
        tmp_path = Path(f.name)
    tmp_path.replace(path)


async def run_download(output_path: Path | None = None) -> int:
    """
    Download, filter and cache the card snapshot.

    Args:
        output_path: Snapshot destination. Defaults to settings.card_cache_path

    Returns:
        Number of cards written
    """
    if output_path is None:
        output_path = settings.card_cache_path

    output_path.parent.mkdir(parents=True, exist_ok=True)
    raw_path = output_path.with_suffix(".raw.json")

    logger.info("Downloading Scryfall oracle cards...")
    async with httpx.AsyncClient(
        timeout=30.0,
        headers={"User-Agent": settings.user_agent, "Accept": "application/json"},
        follow_redirects=True,
    ) as client:
        download_uri = await fetch_download_uri(client)
        logger.info("Fetching bulk card data from %s", download_uri)
        await download_bulk_file(client, download_uri, raw_path)

    try:
        with open(raw_path, encoding="utf-8") as f:
            raw_cards = json.load(f)
    finally:
        raw_path.unlink(missing_ok=True)

    if not isinstance(raw_cards, list):
        raise ValueError("Bulk card data is not a JSON array")

    cards = build_snapshot(raw_cards)
    write_snapshot(cards, output_path)
    logger.info("Wrote %d of %d cards to %s", len(cards), len(raw_cards), output_path)
    return len(cards)


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_download())


if __name__ == "__main__":
    main()
