"""Tests for the exception hierarchy."""

from apirouter.exceptions import ApiRouterError, ConfigError, RouteResolutionError


def test_str_includes_module_and_context():
    err = ApiRouterError("Something broke", module="host", command="gather")
    assert str(err) == "Something broke [module=host] (command=gather)"


def test_str_falls_back_to_class_name():
    assert str(ApiRouterError()) == "ApiRouterError"


def test_subclasses_default_module():
    assert ConfigError("bad").module == "config"
    err = RouteResolutionError("missing", target="pkg:fn")
    assert err.module == "loader"
    assert err.target == "pkg:fn"
    assert err.context == {"target": "pkg:fn"}
    assert isinstance(err, ApiRouterError)


def test_repr():
    assert repr(ConfigError("bad")) == "ConfigError('bad', module='config')"
