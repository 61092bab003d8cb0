"""
Unit Tests for Base Service.

Tests the BaseService error wrapping and validation helpers.
"""

from unittest.mock import patch

import pytest
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from sitekit.backend.core.exceptions import ConflictError, DatabaseError, ValidationError
from sitekit.backend.models.subscription import SubscriptionPlan
from sitekit.backend.schemas.subscription import PlanUpdate
from sitekit.backend.services.base import BaseService


@pytest.fixture
def service(mock_db_session) -> BaseService:
    return BaseService(mock_db_session)


def integrity_error(message: str) -> IntegrityError:
    return IntegrityError("INSERT INTO products ...", {}, Exception(message))


class TestBaseServiceInit:
    def test_exposes_session(self, service, mock_db_session):
        assert service.session is mock_db_session


class TestExecuteDbOperation:
    @pytest.mark.asyncio
    async def test_returns_result_on_success(self, service):
        async def ok():
            return 42

        assert await service._execute_db_operation("count", ok()) == 42

    @pytest.mark.asyncio
    async def test_unique_violation_becomes_conflict(self, service):
        async def failing():
            raise integrity_error("UNIQUE constraint failed: products.sku")

        with pytest.raises(ConflictError, match="SKU already exists"):
            await service._execute_db_operation("create_product", failing(), conflict_message="SKU already exists")

    @pytest.mark.asyncio
    async def test_other_integrity_error(self, service):
        async def failing():
            raise integrity_error("FOREIGN KEY constraint failed")

        with pytest.raises(DatabaseError, match="constraint violation: create_photo"):
            await service._execute_db_operation("create_photo", failing())

    @pytest.mark.asyncio
    async def test_sqlalchemy_error(self, service):
        async def failing():
            raise SQLAlchemyError("database is locked")

        with pytest.raises(DatabaseError, match="operation failed: update_order"):
            await service._execute_db_operation("update_order", failing())


class TestValidateRequired:
    def test_passes_when_present(self, service):
        service._validate_required({"name": "Anna", "phone": "600100200"}, ["name", "phone"])

    def test_reports_all_missing_fields(self, service):
        with pytest.raises(ValidationError) as exc_info:
            service._validate_required({"name": " ", "email": None}, ["name", "phone", "email"])

        assert exc_info.value.details["missing_fields"] == ["name", "phone", "email"]
        assert exc_info.value.message == "name, phone, email required"

    def test_custom_message(self, service):
        with pytest.raises(ValidationError, match="Name and price are required"):
            service._validate_required({"name": "Bed"}, ["name", "price"], "Name and price are required")

    def test_zero_is_present(self, service):
        service._validate_required({"price": 0}, ["price"])


class TestValidateChoice:
    def test_allowed_value(self, service):
        service._validate_choice("draft", ("draft", "published"))

    def test_rejected_value_lists_allowed(self, service):
        with pytest.raises(ValidationError, match="Status must be draft or published") as exc_info:
            service._validate_choice("archived", ("draft", "published"), "Status must be draft or published")

        assert exc_info.value.details == {"allowed": ["draft", "published"]}

    def test_accepts_generators(self, service):
        service._validate_choice(3, (n for n in range(1, 6)))


class TestLogOperation:
    def test_includes_service_name(self, service):
        with patch.object(service._logger, "info") as mock_info:
            service._log_operation("Order created", order_id=7)

        extra = mock_info.call_args.kwargs["extra"]
        assert extra == {"service": "BaseService", "order_id": 7}


class TestChanges:
    def test_only_sent_fields(self, service):
        changes = service._changes(PlanUpdate(price=90), SubscriptionPlan)

        assert changes == {"price": 90}

    def test_null_for_nullable_column_kept(self, service):
        changes = service._changes(PlanUpdate(description=None), SubscriptionPlan)

        assert changes == {"description": None}

    def test_null_for_required_column_rejected(self, service):
        with pytest.raises(ValidationError, match="price, active cannot be null") as exc_info:
            service._changes(PlanUpdate(price=None, active=None, description=None), SubscriptionPlan)

        assert exc_info.value.details == {"null_fields": ["price", "active"]}
