from gust.errors import GustError, ProjectParsingError, UserError


def test_user_error_message_format():
    assert str(UserError("No project found")) == "Error: No project found"


def test_project_parsing_error_message_format():
    err = ProjectParsingError("bad commit")
    assert str(err) == "Project parsing error: bad commit"
    assert err.message == "bad commit"


def test_errors_share_base_class():
    errors = [UserError("x"), ProjectParsingError("y")]
    assert all(isinstance(err, GustError) for err in errors)
    assert [str(err) for err in errors] == ["Error: x", "Project parsing error: y"]


def test_user_error_is_not_parsing_error():
    err = UserError("x")
    assert not isinstance(err, ProjectParsingError)
    assert str(err) == "Error: x"