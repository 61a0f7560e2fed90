"""Tests for payload validation rules."""

import pytest

from workallocation.models.common import Action
from workallocation.models.work_allocation import Role, RoleCompetency, WorkAllocation
from workallocation.models.work_order import SearchCriteria, WorkOrder
from workallocation.services.errors import BadRequestError, ValidationFailedError
from workallocation.services.validator import (
    validate_search_criteria,
    validate_work_allocation,
    validate_work_order,
)


class TestWorkOrderValidation:
    def test_add_requires_name(self) -> None:
        with pytest.raises(ValidationFailedError) as exc_info:
            validate_work_order(WorkOrder(name="  "), Action.ADD)
        assert exc_info.value.errors == ["Work order name should not be empty"]

    def test_add_does_not_require_id(self) -> None:
        validate_work_order(WorkOrder(name="Plan"), Action.ADD)

    def test_update_requires_id(self) -> None:
        with pytest.raises(ValidationFailedError) as exc_info:
            validate_work_order(WorkOrder(name="Plan"), Action.UPDATE)
        assert "Work order id should not be empty" in exc_info.value.errors

    def test_update_collects_all_errors(self) -> None:
        with pytest.raises(ValidationFailedError) as exc_info:
            validate_work_order(WorkOrder(), Action.UPDATE)
        assert len(exc_info.value.errors) == 2

    def test_none_rejected(self) -> None:
        with pytest.raises(ValidationFailedError):
            validate_work_order(None, Action.ADD)

    def test_validation_error_is_a_bad_request(self) -> None:
        with pytest.raises(BadRequestError):
            validate_work_order(WorkOrder(), Action.ADD)


class TestWorkAllocationValidation:
    def test_valid_allocation(self) -> None:
        validate_work_allocation(WorkAllocation(work_order_id="wo1", user_id="u1"))

    def test_user_name_is_enough(self) -> None:
        validate_work_allocation(WorkAllocation(work_order_id="wo1", user_name="Asha"))

    def test_requires_work_order_and_user(self) -> None:
        with pytest.raises(ValidationFailedError) as exc_info:
            validate_work_allocation(WorkAllocation())
        assert exc_info.value.errors == [
            "Work order id should not be empty",
            "Either user id or user name is required",
        ]

    def test_roles_need_names(self) -> None:
        allocation = WorkAllocation(
            work_order_id="wo1", user_id="u1",
            role_competency_list=[
                RoleCompetency(role_details=Role(name="Planner")),
                RoleCompetency(role_details=Role(name="")),
                RoleCompetency(),
            ],
        )
        with pytest.raises(ValidationFailedError) as exc_info:
            validate_work_allocation(allocation)
        assert len(exc_info.value.errors) == 2
        assert "position 1" in exc_info.value.errors[0]


class TestSearchCriteriaValidation:
    def test_defaults_are_valid(self) -> None:
        validate_search_criteria(SearchCriteria())

    @pytest.mark.parametrize("page_size", [0, 101])
    def test_page_size_bounds(self, page_size: int) -> None:
        with pytest.raises(ValidationFailedError):
            validate_search_criteria(SearchCriteria(page_size=page_size))

    def test_negative_page(self) -> None:
        with pytest.raises(ValidationFailedError):
            validate_search_criteria(SearchCriteria(page_no=-1))

    def test_none_rejected(self) -> None:
        with pytest.raises(ValidationFailedError):
            validate_search_criteria(None)
