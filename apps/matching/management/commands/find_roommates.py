from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from apps.matching.repositories import DjangoMatchRepository, DjangoUserRepository
from apps.matching.services.search import find_matches
from apps.users.models import User


class Command(BaseCommand):
    help = "Print ranked roommate candidates for a user."

    def add_arguments(self, parser) -> None:
        parser.add_argument("email")
        parser.add_argument("--limit", type=int, default=None)

    def handle(self, *args, **options):
        user = User.objects.filter(email=options["email"]).first()
        if user is None:
            raise CommandError(f"No user with email {options['email']}.")

        results = find_matches(
            user.id,
            options["limit"],
            users=DjangoUserRepository(),
            matches=DjangoMatchRepository(),
        )
        if not results:
            self.stdout.write("No candidates found.")
            return
        emails = dict(User.objects.filter(id__in=[r.candidate_id for r in results]).values_list("id", "email"))
        for result in results:
            self.stdout.write(
                f"{result.rank:>3}. {emails.get(result.candidate_id, result.candidate_id)} "
                f"score={result.compatibility_score} ({result.outcome.value})"
            )
