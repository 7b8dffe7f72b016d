import argparse
import asyncio
import logging
import sys

from client.config import BACKEND_URL
from client.forms.city_edit import CityEditForm
from client.services.backend_client import BackendClient, create_http_client

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create or edit a WorldCities city.")
    parser.add_argument("--id", type=int, default=None, help="city to edit; omit to create a new one")
    parser.add_argument("--name")
    parser.add_argument("--lat")
    parser.add_argument("--lon")
    parser.add_argument("--country-id", dest="country_id")
    parser.add_argument("--backend-url", default=BACKEND_URL)
    return parser


async def run(args: argparse.Namespace) -> int:
    """Load the form, apply the given values and submit once."""
    async with create_http_client(args.backend_url) as http_client:
        form = CityEditForm(
            BackendClient(http_client),
            navigate=lambda path: logger.info("Navigating to %s", path),
        )
        await form.load(args.id)
        logger.info("%s (%d countries available)", form.title or "City", len(form.countries))
        if form.error:
            logger.error(form.error)
            return 1

        for field in ("name", "lat", "lon", "country_id"):
            value = getattr(args, field)
            if value is not None:
                form.set_value(field, value)
        await form.wait_validation()

        try:
            if await form.submit():
                logger.info("Saved: %s", form.city)
                return 0
        finally:
            form.close()

        for field, message in form.errors.items():
            logger.error("%s: %s", field, message)
        if form.error:
            logger.error(form.error)
        return 1


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s %(name)s: %(message)s")
    args = build_parser().parse_args(argv)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
