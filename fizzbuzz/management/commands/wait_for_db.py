import logging
import time

from django.core.management.base import BaseCommand, CommandError
from django.db import DEFAULT_DB_ALIAS, OperationalError, connections

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Block until the database accepts connections, or fail after --timeout seconds."

    def add_arguments(self, parser):
        parser.add_argument("--interval", type=float, default=10.0,
                            help="Seconds between two connection attempts (default: 10).")
        parser.add_argument("--timeout", type=float, default=300.0,
                            help="Seconds before giving up (default: 300).")
        parser.add_argument("--database", default=DEFAULT_DB_ALIAS,
                            help="Database alias to wait for.")

    def handle(self, *args, **options):
        interval = options["interval"]
        deadline = time.monotonic() + options["timeout"]
        connection = connections[options["database"]]

        attempt = 0
        while True:
            attempt += 1
            try:
                connection.ensure_connection()
                break
            except OperationalError as exc:
                if time.monotonic() + interval > deadline:
                    raise CommandError("failed to connect to database") from exc
                logger.info("database unavailable (attempt %d), retrying in %ss: %s", attempt, interval, exc)
                time.sleep(interval)

        self.stdout.write(self.style.SUCCESS("database available"))
