"""Tests for collecting flags into generator parameters."""
from __future__ import annotations

import argparse

import pytest

from kubegen.errors import MissingParameterError
from kubegen.flags import get_flag_string_list, make_params
from kubegen.generators import GeneratorParam, validate_params


class TestGetFlagStringList:
    """Repeated flags keep their order and duplicates."""

    def test_env_order_preserved(self, run_flags):
        flags = run_flags("foo", "--image", "nginx", "--env", "a=b", "--env", "c=d")
        env = get_flag_string_list(flags, "env")
        assert env == ["a=b", "c=d"]
        assert len(env) == 2

    def test_duplicates_kept(self, run_flags):
        flags = run_flags("foo", "--env", "a=b", "--env", "a=b")
        assert get_flag_string_list(flags, "env") == ["a=b", "a=b"]

    def test_unset_flag_is_empty(self, run_flags):
        assert get_flag_string_list(run_flags("foo"), "env") == []

    def test_missing_attribute_is_empty(self):
        assert get_flag_string_list(argparse.Namespace(), "env") == []


class TestMakeParams:
    """Flags are copied under their parameter names."""

    def test_scalars_are_stringified(self, run_flags):
        flags = run_flags("foo", "--image", "nginx", "--port", "80", "--stdin")
        params = make_params(
            flags,
            [GeneratorParam("image"), GeneratorParam("port"), GeneratorParam("stdin"), GeneratorParam("replicas")],
        )
        assert params == {"image": "nginx", "port": "80", "stdin": "true", "replicas": "1"}

    def test_dashed_names_map_to_flags(self, run_flags):
        flags = run_flags("foo", "--service-generator", "service/v1")
        params = make_params(flags, [GeneratorParam("service-generator")])
        assert params == {"service-generator": "service/v1"}

    def test_empty_and_unset_flags_skipped(self, run_flags):
        flags = run_flags("foo")
        params = make_params(flags, [GeneratorParam("labels"), GeneratorParam("port"), GeneratorParam("env")])
        assert params == {}

    def test_list_flags_stay_lists(self, run_flags):
        flags = run_flags("foo", "--env", "a=b", "--env", "c=d")
        assert make_params(flags, [GeneratorParam("env")]) == {"env": ["a=b", "c=d"]}

    def test_unknown_params_ignored(self, run_flags):
        assert make_params(run_flags("foo"), [GeneratorParam("selector")]) == {}


class TestValidateParams:
    def test_required_present(self):
        validate_params([GeneratorParam("name", required=True)], {"name": "foo"})

    @pytest.mark.parametrize("params", [{}, {"name": ""}, {"name": []}])
    def test_required_missing(self, params):
        with pytest.raises(MissingParameterError) as excinfo:
            validate_params([GeneratorParam("name", required=True)], params)
        assert excinfo.value.name == "name"

    def test_optional_missing_is_fine(self):
        validate_params([GeneratorParam("labels")], {})
