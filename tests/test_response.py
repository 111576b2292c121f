from autolister.utils.response import success_response, error_response


def test_success_response_with_data():
    result = success_response(data={"key": "value"})
    assert result == {"status": "success", "data": {"key": "value"}, "message": None}


def test_success_response_with_message():
    result = success_response(data=None, message="Listing generated")
    assert result == {"status": "success", "data": None, "message": "Listing generated"}


def test_error_response():
    result = error_response("Vehicle not found")
    assert result == {"status": "error", "data": None, "message": "Vehicle not found"}


def test_error_response_with_data():
    result = error_response("Invalid request", data={"field": "make"})
    assert result == {"status": "error", "data": {"field": "make"}, "message": "Invalid request"}
