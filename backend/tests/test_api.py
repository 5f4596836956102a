"""
Tests for the talent search HTTP endpoints.
"""
import json
import uuid
from unittest.mock import MagicMock, patch

from django.test import TestCase
from langchain_core.language_models import FakeListChatModel

from recruiting.db.models import CoachFavorite, PlayerEmbedding
from recruiting.services.analysis_service import AnalysisService
from recruiting.services.embedding_service import EmbeddingService
from recruiting.services.similarity_search import SimilaritySearchEngine
from recruiting.services.talent_search_service import TalentSearchService
from tests.helpers import (
    CONFIGURED,
    UNCONFIGURED,
    KeywordEmbeddingsClient,
    make_coach,
    make_game,
    make_player,
    make_profile,
    make_user,
)

SEARCH_URL = "/api/talent-search/search/"
AVAILABILITY_URL = "/api/talent-search/availability/"
REFRESH_URL = "/api/talent-search/admin/embeddings/refresh/"
STATS_URL = "/api/talent-search/admin/embeddings/stats/"

ANALYSIS_REPLY = json.dumps({
    "overview": "Confident entry player.",
    "pros": ["Aim", "Communication"],
    "cons": ["Consistency"],
})


def analysis_url(player_id):
    return f"/api/talent-search/players/{player_id}/analysis/"


def update_url(player_id):
    return f"/api/talent-search/admin/embeddings/{player_id}/update/"


def build_services(config, client):
    embedding_service = EmbeddingService(config, embeddings_client=client)
    search_service = TalentSearchService(
        config,
        search_engine=SimilaritySearchEngine(config, embeddings_client=client),
        embedding_service=embedding_service,
    )
    return embedding_service, search_service


class TalentSearchAPITestCase(TestCase):

    def setUp(self):
        self.client_embeddings = KeywordEmbeddingsClient()
        self.embedding_service, self.search_service = build_services(CONFIGURED, self.client_embeddings)

        patchers = [
            patch(
                "recruiting.api.talent_search.build_talent_search_service",
                side_effect=lambda: self.search_service,
            ),
            patch(
                "recruiting.api.talent_search.build_embedding_service",
                side_effect=lambda: self.embedding_service,
            ),
        ]
        for patcher in patchers:
            patcher.start()
            self.addCleanup(patcher.stop)

        self.valorant = make_game("Valorant", "VAL")
        self.coach = make_coach()
        self.duelist = make_player("Jordan", "Lee", gpa=3.8, bio="Aggressive duelist entry fragger", class_year="2026")
        make_profile(self.duelist, self.valorant, role="Duelist")
        self.support = make_player("Sam", "Park", gpa=3.2, bio="Calm support shotcaller", class_year="2027")
        make_profile(self.support, self.valorant, role="Controller")

    def post_json(self, url, payload):
        return self.client.post(url, data=json.dumps(payload), content_type="application/json")


class TestSearchEndpoint(TalentSearchAPITestCase):

    def setUp(self):
        super().setUp()
        self.embedding_service.refresh_all(only_missing=False)

    def test_requires_authentication(self):
        response = self.post_json(SEARCH_URL, {"query": "duelist"})

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["code"], "unauthenticated")

    def test_requires_coach(self):
        self.client.force_login(make_user("player-account"))

        response = self.post_json(SEARCH_URL, {"query": "duelist"})

        self.assertEqual(response.status_code, 403)

    def test_requires_onboarded_coach(self):
        coach = make_coach("newcoach", onboarded=False)
        self.client.force_login(coach.user)

        response = self.post_json(SEARCH_URL, {"query": "duelist"})

        self.assertEqual(response.status_code, 403)
        self.assertIn("onboarding", response.json()["error"])

    def test_search_returns_ranked_results(self):
        CoachFavorite.objects.create(coach=self.coach, player=self.duelist)
        self.client.force_login(self.coach.user)

        response = self.post_json(SEARCH_URL, {"query": "aggressive duelist", "min_similarity": 0})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["query"], "aggressive duelist")
        self.assertEqual(body["total_count"], len(body["results"]))
        self.assertEqual(body["results"][0]["id"], str(self.duelist.id))
        self.assertTrue(body["results"][0]["is_favorited"])
        scores = [r["similarity_score"] for r in body["results"]]
        self.assertEqual(scores, sorted(scores, reverse=True))
        self.assertEqual(body["results"][0]["academic_info"]["gpa"], 3.8)
        self.assertEqual(body["results"][0]["game_profiles"][0]["role"], "Duelist")

    def test_search_applies_filters(self):
        self.client.force_login(self.coach.user)

        response = self.post_json(SEARCH_URL, {
            "query": "aggressive duelist",
            "class_years": ["2027"],
            "min_similarity": 0,
        })

        self.assertEqual(response.status_code, 200)
        ids = [r["id"] for r in response.json()["results"]]
        self.assertEqual(ids, [str(self.support.id)])

    def test_validation_errors(self):
        self.client.force_login(self.coach.user)
        payloads = [
            {},
            {"query": "   "},
            {"query": "duelist", "limit": 0},
            {"query": "duelist", "min_similarity": 2},
            {"query": "duelist", "min_gpa": 4.0, "max_gpa": 3.0},
        ]
        for payload in payloads:
            with self.subTest(payload=payload):
                response = self.post_json(SEARCH_URL, payload)

                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.json()["code"], "invalid_request")

        self.assertEqual(self.client_embeddings.queries, [])

    def test_validation_error_details(self):
        self.client.force_login(self.coach.user)

        response = self.post_json(SEARCH_URL, {"query": "duelist", "limit": 500})

        details = response.json()["details"]
        self.assertEqual(details[0]["field"], "limit")

    def test_invalid_json(self):
        self.client.force_login(self.coach.user)

        response = self.client.post(SEARCH_URL, data="{not json", content_type="application/json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Invalid JSON")

    def test_non_object_body(self):
        self.client.force_login(self.coach.user)

        response = self.post_json(SEARCH_URL, ["duelist"])

        self.assertEqual(response.status_code, 400)

    def test_unconfigured_backend(self):
        _, self.search_service = build_services(UNCONFIGURED, self.client_embeddings)
        self.client.force_login(self.coach.user)

        response = self.post_json(SEARCH_URL, {"query": "duelist"})

        self.assertEqual(response.status_code, 412)
        self.assertEqual(response.json()["code"], "feature_unavailable")
        self.assertEqual(self.client_embeddings.queries, [])

    def test_embedding_backend_failure(self):
        failing = KeywordEmbeddingsClient()
        failing.embed_query = MagicMock(side_effect=RuntimeError("upstream 503"))
        _, self.search_service = build_services(CONFIGURED, failing)
        self.client.force_login(self.coach.user)

        response = self.post_json(SEARCH_URL, {"query": "duelist"})

        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["code"], "embedding_backend_error")

    def test_unexpected_error_is_opaque(self):
        self.search_service = MagicMock()
        self.search_service.search.side_effect = RuntimeError("connection pool exhausted")
        self.client.force_login(self.coach.user)

        response = self.post_json(SEARCH_URL, {"query": "duelist"})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["code"], "internal_error")
        self.assertNotIn("connection pool", response.content.decode())

    def test_get_not_allowed(self):
        self.client.force_login(self.coach.user)

        response = self.client.get(SEARCH_URL)

        self.assertEqual(response.status_code, 405)


class TestAvailabilityEndpoint(TalentSearchAPITestCase):

    def test_available(self):
        self.client.force_login(self.coach.user)

        response = self.client.get(AVAILABILITY_URL)

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["is_available"])

    def test_unavailable(self):
        _, self.search_service = build_services(UNCONFIGURED, self.client_embeddings)
        self.client.force_login(self.coach.user)

        response = self.client.get(AVAILABILITY_URL)

        self.assertEqual(response.status_code, 200)
        self.assertFalse(response.json()["is_available"])
        self.assertIn("not configured", response.json()["message"])


class TestAnalysisEndpoint(TalentSearchAPITestCase):

    def setUp(self):
        super().setUp()
        self.chat_model = FakeListChatModel(responses=[ANALYSIS_REPLY])
        patcher = patch(
            "recruiting.api.talent_search.build_analysis_service",
            side_effect=lambda: AnalysisService(CONFIGURED, chat_model=self.chat_model),
        )
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_returns_analysis(self):
        self.client.force_login(self.coach.user)

        response = self.client.get(analysis_url(self.duelist.id))

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["overview"], "Confident entry player.")
        self.assertEqual(body["pros"], ["Aim", "Communication"])
        self.assertEqual(body["cons"], ["Consistency"])
        self.assertFalse(body["is_cached"])
        self.assertIn("generated_at", body)

    def test_unknown_player(self):
        self.client.force_login(self.coach.user)

        response = self.client.get(analysis_url(uuid.uuid4()))

        self.assertEqual(response.status_code, 404)

    def test_unparseable_reply(self):
        self.chat_model = FakeListChatModel(responses=["Great player, would recruit."])
        self.client.force_login(self.coach.user)

        response = self.client.get(analysis_url(self.duelist.id))

        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["code"], "analysis_generation_failed")

    def test_requires_coach(self):
        response = self.client.get(analysis_url(self.duelist.id))

        self.assertEqual(response.status_code, 401)


class TestAdminEndpoints(TalentSearchAPITestCase):

    def setUp(self):
        super().setUp()
        self.admin = make_user("admin", is_staff=True)

    def test_non_staff_forbidden(self):
        self.client.force_login(self.coach.user)

        for response in [
            self.client.get(STATS_URL),
            self.post_json(REFRESH_URL, {}),
            self.client.post(update_url(self.duelist.id)),
        ]:
            self.assertEqual(response.status_code, 403)

        self.assertFalse(PlayerEmbedding.objects.exists())

    def test_stats(self):
        self.embedding_service.upsert_embedding(self.duelist.id)
        self.client.force_login(self.admin)

        response = self.client.get(STATS_URL)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {
            "total_embeddings": 1,
            "missing_embeddings": 1,
            "total_players": 2,
            "coverage_percent": 50,
            "is_configured": True,
        })

    def test_refresh(self):
        self.client.force_login(self.admin)

        response = self.post_json(REFRESH_URL, {"only_missing": True, "batch_size": 5, "batch_delay": 0})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["processed"], 2)
        self.assertEqual(body["succeeded"], 2)
        self.assertEqual(body["failed"], 0)
        self.assertEqual(PlayerEmbedding.objects.count(), 2)

    def test_refresh_reports_failures(self):
        self.client_embeddings.fail_on = ["shotcaller"]
        self.client.force_login(self.admin)

        response = self.post_json(REFRESH_URL, {"batch_delay": 0})

        body = response.json()
        self.assertEqual(body["succeeded"], 1)
        self.assertEqual(body["failed"], 1)
        self.assertEqual(body["failed_ids"], [str(self.support.id)])

    def test_refresh_rejects_invalid_options(self):
        self.client.force_login(self.admin)

        response = self.post_json(REFRESH_URL, {"batch_size": 500})

        self.assertEqual(response.status_code, 400)

    def test_refresh_unconfigured(self):
        self.embedding_service, _ = build_services(UNCONFIGURED, self.client_embeddings)
        self.client.force_login(self.admin)

        response = self.post_json(REFRESH_URL, {})

        self.assertEqual(response.status_code, 412)

    def test_update_player_embedding(self):
        self.client.force_login(self.admin)

        response = self.client.post(update_url(self.duelist.id))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"success": True, "reason": None})
        self.assertTrue(PlayerEmbedding.objects.filter(player=self.duelist).exists())

    def test_update_unknown_player_reports_failure(self):
        self.client.force_login(self.admin)

        response = self.client.post(update_url(uuid.uuid4()))

        self.assertEqual(response.status_code, 200)
        self.assertFalse(response.json()["success"])
        self.assertIn("Player not found", response.json()["reason"])


class TestHealthEndpoint(TestCase):

    def test_health(self):
        response = self.client.get("/api/health/")

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["services"]["database"]["status"], "healthy")
        self.assertIn("talent_search", body["services"])
