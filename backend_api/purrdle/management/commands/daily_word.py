from datetime import date

from django.apps import apps
from django.core.management.base import BaseCommand, CommandError

from purrdle.conf import epoch, reference_timezone
from purrdle.puzzles import daily_index, day_number, today


class Command(BaseCommand):
    help = "Show the daily word's index, public identifier and text for a date (default: today)."

    def add_arguments(self, parser):
        parser.add_argument("--date", dest="day", help="Calendar date as YYYY-MM-DD.")
        parser.add_argument("--reveal", action="store_true", help="Also print the word itself.")

    def handle(self, *args, **options):
        # PUBLIC_INTERFACE
        if options.get("day"):
            try:
                day = date.fromisoformat(options["day"])
            except ValueError:
                raise CommandError(f"Invalid date {options['day']!r}; expected YYYY-MM-DD.")
        else:
            day = today(reference_timezone())

        app = apps.get_app_config("purrdle")
        index = daily_index(len(app.catalog), day, epoch())
        self.stdout.write(
            f"{day.isoformat()} puzzle #{day_number(day, epoch()) + 1}: index {index}, id {app.codec.encode(index)}"
        )
        if options.get("reveal"):
            self.stdout.write(self.style.SUCCESS(app.catalog[index].word))
