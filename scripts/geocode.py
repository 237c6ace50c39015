# Script that forward-geocodes a piece of address text and prints the matches
from argparse import ArgumentParser
import logging
import sys

from dotenv import load_dotenv

from geocoding_adapter import GeocodeQuery, GeocodingError, available_providers
from geocoding_adapter.settings import Settings, build_adapter

if __name__ == '__main__':
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    config = Settings()

    parser = ArgumentParser()
    parser.add_argument('text')
    parser.add_argument('--locale', '-l', type=str, default=config.locale)
    parser.add_argument('--limit', '-n', type=int, default=None)
    parser.add_argument('--provider', '-p', type=str, default=config.provider, choices=available_providers())
    args = parser.parse_args()

    config = config.model_copy(update={'provider': args.provider})

    try:
        adapter = build_adapter(config)
        addresses = adapter.geocode(GeocodeQuery(args.text, locale=args.locale))
    except GeocodingError as e:
        print(f'{type(e).__name__}: {e}', file=sys.stderr)
        sys.exit(1)

    if addresses.is_empty():
        print('No matches')
    for address in addresses.slice(0, args.limit):
        street = ' '.join(p for p in (address.street_number, address.street_name) if p)
        parts = [street, address.postal_code, address.locality, address.country]
        print(f"{', '.join(p for p in parts if p)} ({address.latitude}, {address.longitude}) [{address.timezone_id}]")
