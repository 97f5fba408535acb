from __future__ import annotations

from django.test import TestCase

from apps.matching.models import Match, MatchRequest
from apps.matching.services.requests import (
    MatchRequestError,
    MatchRequestForbidden,
    MatchRequestNotFound,
    end_match,
    list_active_matches,
    list_match_requests,
    respond_to_match_request,
    send_match_request,
)
from apps.notifications.models import Notification
from apps.profile.models import BasicPreference, LifestylePreference, Profile
from apps.users.models import Block, User


def _complete_student(email: str, age: int, **basic) -> User:
    user = User.objects.create_user(email=email, password="pass12345")
    Profile.objects.create(user=user, age=age, gender="female")
    BasicPreference.objects.create(
        user=user,
        gender_preference="any",
        age_min=basic.get("age_min", 18),
        age_max=basic.get("age_max", 30),
        budget_min=basic.get("budget_min", 400),
        budget_max=basic.get("budget_max", 600),
    )
    LifestylePreference.objects.create(
        user=user,
        sleep_schedule=basic.get("sleep_schedule", "night_owl"),
        cleanliness="very_clean",
        guest_policy="sometimes",
    )
    return user


class MatchRequestWorkflowTests(TestCase):
    def setUp(self) -> None:
        self.alex = _complete_student("alex@example.com", 21)
        self.bea = _complete_student("bea@example.com", 22, sleep_schedule="early_bird")

    def test_send_creates_pending_request_and_notifies_receiver(self) -> None:
        request = send_match_request(self.alex, self.bea.id, "Hi!")
        self.assertEqual(request.status, MatchRequest.Status.PENDING)
        self.assertEqual(request.message, "Hi!")
        notification = Notification.objects.get(user=self.bea)
        self.assertEqual(notification.type, Notification.Type.MATCH_REQUEST)
        self.assertEqual(notification.payload["request_id"], request.id)
        self.assertIn("alex", notification.payload["text"])

    def test_cannot_request_self(self) -> None:
        with self.assertRaises(MatchRequestError):
            send_match_request(self.alex, self.alex.id)

    def test_unknown_or_suspended_receiver(self) -> None:
        with self.assertRaises(MatchRequestNotFound):
            send_match_request(self.alex, 999_999)
        self.bea.status = User.Status.SUSPENDED
        self.bea.save()
        with self.assertRaises(MatchRequestNotFound):
            send_match_request(self.alex, self.bea.id)

    def test_block_in_either_direction_forbids_request(self) -> None:
        Block.objects.create(user=self.bea, target=self.alex)
        with self.assertRaises(MatchRequestForbidden):
            send_match_request(self.alex, self.bea.id)

    def test_duplicate_pending_request_rejected(self) -> None:
        send_match_request(self.alex, self.bea.id)
        with self.assertRaises(MatchRequestError):
            send_match_request(self.bea, self.alex.id)

    def test_accept_creates_scored_match_and_notifies_both(self) -> None:
        request = send_match_request(self.alex, self.bea.id)
        updated = respond_to_match_request(request.id, self.bea, "accepted")

        self.assertEqual(updated.status, MatchRequest.Status.ACCEPTED)
        match = Match.objects.get()
        self.assertEqual(match.user_one_id, min(self.alex.id, self.bea.id))
        self.assertEqual(match.user_two_id, max(self.alex.id, self.bea.id))
        # Everything agrees except sleep schedule.
        self.assertEqual(match.compatibility_score, 89)
        self.assertEqual(
            Notification.objects.filter(type=Notification.Type.MATCH_ACCEPTED).count(),
            2,
        )

    def test_already_matched_users_cannot_request_again(self) -> None:
        request = send_match_request(self.alex, self.bea.id)
        respond_to_match_request(request.id, self.bea, "accepted")
        with self.assertRaises(MatchRequestError):
            send_match_request(self.alex, self.bea.id)

    def test_reject_does_not_create_match(self) -> None:
        request = send_match_request(self.alex, self.bea.id)
        respond_to_match_request(request.id, self.bea, "rejected")
        self.assertFalse(Match.objects.exists())

    def test_only_receiver_accepts_and_only_sender_cancels(self) -> None:
        request = send_match_request(self.alex, self.bea.id)
        with self.assertRaises(MatchRequestForbidden):
            respond_to_match_request(request.id, self.alex, "accepted")
        with self.assertRaises(MatchRequestForbidden):
            respond_to_match_request(request.id, self.bea, "cancelled")
        outsider = User.objects.create_user(email="cara@example.com", password="pass12345")
        with self.assertRaises(MatchRequestForbidden):
            respond_to_match_request(request.id, outsider, "rejected")

        cancelled = respond_to_match_request(request.id, self.alex, "cancelled")
        self.assertEqual(cancelled.status, MatchRequest.Status.CANCELLED)

    def test_invalid_status_and_non_pending_request(self) -> None:
        request = send_match_request(self.alex, self.bea.id)
        with self.assertRaises(MatchRequestError):
            respond_to_match_request(request.id, self.bea, "pending")
        respond_to_match_request(request.id, self.bea, "rejected")
        with self.assertRaises(MatchRequestError):
            respond_to_match_request(request.id, self.bea, "accepted")
        with self.assertRaises(MatchRequestNotFound):
            respond_to_match_request(999_999, self.bea, "accepted")

    def test_accept_without_preferences_uses_neutral_score(self) -> None:
        newcomer = User.objects.create_user(email="new@example.com", password="pass12345")
        Profile.objects.create(user=newcomer, age=20, gender="male")
        request = send_match_request(newcomer, self.alex.id)
        respond_to_match_request(request.id, self.alex, "accepted")
        self.assertEqual(Match.objects.get().compatibility_score, 50)

    def test_listing_and_ending_matches(self) -> None:
        request = send_match_request(self.alex, self.bea.id)
        self.assertEqual([r.id for r in list_match_requests(self.alex)], [request.id])
        self.assertEqual([r.id for r in list_match_requests(self.bea)], [request.id])

        respond_to_match_request(request.id, self.bea, "accepted")
        (match,) = list_active_matches(self.alex)
        self.assertEqual(match.other_user_id(self.alex.id), self.bea.id)

        outsider = User.objects.create_user(email="cara@example.com", password="pass12345")
        with self.assertRaises(MatchRequestForbidden):
            end_match(match.id, outsider)
        ended = end_match(match.id, self.bea)
        self.assertEqual(ended.status, Match.Status.INACTIVE)
        self.assertEqual(list_active_matches(self.alex), [])

    def test_rematch_reactivates_existing_pair(self) -> None:
        request = send_match_request(self.alex, self.bea.id)
        respond_to_match_request(request.id, self.bea, "accepted")
        end_match(Match.objects.get().id, self.alex)

        again = send_match_request(self.bea, self.alex.id)
        respond_to_match_request(again.id, self.alex, "accepted")

        self.assertEqual(Match.objects.count(), 1)
        self.assertEqual(Match.objects.get().status, Match.Status.ACTIVE)

    def test_suspended_sender_cannot_request(self) -> None:
        self.alex.status = User.Status.SUSPENDED
        self.alex.save()
        with self.assertRaises(MatchRequestForbidden):
            send_match_request(self.alex, self.bea.id)
        self.assertFalse(MatchRequest.objects.exists())

    def test_accept_refused_once_a_participant_is_suspended(self) -> None:
        request = send_match_request(self.alex, self.bea.id)
        User.objects.filter(id=self.alex.id).update(status=User.Status.SUSPENDED)

        with self.assertRaises(MatchRequestForbidden):
            respond_to_match_request(request.id, self.bea, "accepted")

        self.assertFalse(Match.objects.exists())
        request.refresh_from_db()
        self.assertEqual(request.status, MatchRequest.Status.PENDING)
        # Declining still works.
        respond_to_match_request(request.id, self.bea, "rejected")
