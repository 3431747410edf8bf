from django.core.management.base import BaseCommand

from site_backend.assets import asset_buckets, discard_objects, find_orphans


class Command(BaseCommand):
    help = "Remove blob-store objects that no row references any more."

    def add_arguments(self, parser):
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Only report orphaned objects.",
        )
        parser.add_argument(
            "--bucket",
            action="append",
            dest="buckets",
            help="Limit the sweep to this bucket (repeatable).",
        )

    def handle(self, *args, **options):
        dry_run = options["dry_run"]
        total = 0
        for bucket in options["buckets"] or asset_buckets():
            orphans = find_orphans(bucket)
            total += len(orphans)
            for path in orphans:
                self.stdout.write(f"{bucket}/{path}")
            if orphans and not dry_run:
                if not discard_objects(bucket, orphans):
                    self.stderr.write(self.style.WARNING(f"Some objects in {bucket} could not be removed"))

        verb = "Found" if dry_run else "Removed"
        self.stdout.write(self.style.SUCCESS(f"{verb} {total} orphaned object(s)"))
