"""
Unit tests for Dependency Injection providers.

Validates that:
- Settings and the token verifier are process-wide via @lru_cache
- Services are built per request around the request's session
- Services can be independently instantiated for testing
"""

from unittest.mock import MagicMock

from app.api.dependencies import (
    get_account_service,
    get_ledger_service,
    get_plan_service,
    get_upgrade_quote_service,
)
from app.config.settings import Settings, get_settings
from app.domain.services import (
    AccountService,
    BillingLedgerService,
    PlanService,
    UpgradeQuoteService,
)
from app.infrastructure.security.tokens import TokenVerifier, get_token_verifier


class TestDIProviders:
    """Tests for @lru_cache DI provider functions."""

    def test_settings_provider_is_cached(self):
        assert get_settings() is get_settings()

    def test_token_verifier_provider_is_cached(self):
        assert get_token_verifier() is get_token_verifier()

    def test_token_verifier_independently_instantiable(self):
        settings = Settings(jwt_secret="another-secret")
        verifier = TokenVerifier(settings)
        assert verifier is not get_token_verifier()
        assert verifier.verify(verifier.issue(3)).user_id == 3


class TestServiceProviders:
    """Each call wraps the given session in a fresh service."""

    def test_plan_service_per_session(self):
        session = MagicMock()
        first = get_plan_service(session)
        assert isinstance(first, PlanService)
        assert first.session is session
        assert get_plan_service(session) is not first

    def test_upgrade_service_takes_cycle_from_settings(self):
        settings = Settings(jwt_secret="s", proration_cycle_days=31)
        service = get_upgrade_quote_service(MagicMock(), settings)
        assert isinstance(service, UpgradeQuoteService)
        assert service.cycle_days == 31

    def test_ledger_service(self):
        assert isinstance(get_ledger_service(MagicMock()), BillingLedgerService)

    def test_account_service_takes_attempt_cap(self):
        settings = Settings(jwt_secret="s", max_verification_attempts=3)
        service = get_account_service(MagicMock(), settings)
        assert isinstance(service, AccountService)
        assert service.max_attempts == 3
