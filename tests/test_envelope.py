"""
Employee Directory API - Response Envelope Tests
=================================================
"""

import pytest

from employee_directory.schemas.branch import Branch
from employee_directory.schemas.envelope import (
    error_body,
    success_response,
    validation_error_body,
)


class TestSuccessResponse:

    def test_message_and_data(self):
        branch = Branch(id="b1", name="HQ", address="1 Main St", phone="555-0100")
        envelope = success_response(message="Branch retrieved successfully.", data=branch)

        assert envelope.model_dump() == {
            "status": "success",
            "message": "Branch retrieved successfully.",
            "data": {"id": "b1", "name": "HQ", "address": "1 Main St", "phone": "555-0100"},
        }

    def test_message_only_omits_data(self):
        envelope = success_response(message="Branch deleted successfully")
        assert envelope.model_dump(exclude_none=True) == {
            "status": "success",
            "message": "Branch deleted successfully",
        }

    def test_data_only(self):
        envelope = success_response(data=[1, 2])
        assert envelope.model_dump(exclude_none=True) == {"status": "success", "data": [1, 2]}

    def test_empty_list_counts_as_data(self):
        envelope = success_response(data=[])
        assert envelope.data == []

    def test_requires_message_or_data(self):
        with pytest.raises(ValueError):
            success_response()


class TestErrorBodies:

    def test_error_envelope(self):
        assert error_body("Branch with ID x does not exist") == {
            "status": "error",
            "message": "Branch with ID x does not exist",
        }

    def test_validation_error_shape(self):
        assert validation_error_body("Validation error: Body: Name is required") == {
            "error": "Validation error: Body: Name is required"
        }
