from fusioncompute.errors import FusionComputeError, HttpStatusError, format_http_error


class _FakeResponse:
    def __init__(self, status_code, text=None, content=b""):
        self.status_code = status_code
        self.text = text
        self.content = content


def test_format_http_error_includes_platform_error_code():
    body = '{"errorCode": "10420004", "errorDes": "The host is in maintenance mode."}'
    error = format_http_error(_FakeResponse(409, body), method="POST", path="/service/sites/1/vms/i-1/action/migrate")

    assert isinstance(error, HttpStatusError)
    assert isinstance(error, FusionComputeError)
    assert error.status_code == 409
    assert error.body == body
    assert error.error_code == "10420004"
    assert error.method == "POST"
    assert error.path == "/service/sites/1/vms/i-1/action/migrate"
    assert "HTTP 409 POST /service/sites/1/vms/i-1/action/migrate" in str(error)
    assert "The host is in maintenance mode." in str(error)


def test_format_http_error_without_request_context():
    error = format_http_error(_FakeResponse(500, "Internal Server Error"))
    assert str(error) == "HTTP 500: Internal Server Error"
    assert error.error_code is None


def test_format_http_error_falls_back_to_raw_content():
    error = format_http_error(_FakeResponse(503, text=None, content=b"unavailable"))
    assert error.body == "unavailable"


def test_format_http_error_empty_body():
    error = format_http_error(_FakeResponse(404, ""))
    assert error.body == ""
    assert str(error) == "HTTP 404: "
