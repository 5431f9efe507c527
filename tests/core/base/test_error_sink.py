import math

import pytest

from model_math.core.base.constants import (
    INTEGER_MAX,
    INTEGER_MIN,
    factorial_table,
    log_factorial_table,
)
from model_math.core.base.error_sink import (
    ErrorKind,
    clear_error_flags,
    error_flags,
    error_policy,
    has_error,
    trigger_can_not_converge,
    trigger_infinity,
    trigger_invalid_parameter,
    trigger_invalid_range,
    trigger_malformed_string,
    trigger_nan,
    trigger_type_conversion,
)
from model_math.core.base.exceptions import (
    CanNotConvergeError,
    InfinityError,
    InvalidParameterError,
    InvalidRangeError,
    MalformedStringError,
    ModelMathError,
    NaNError,
    TypeConversionError,
    check_index,
)
from model_math.core.base.validation import (
    is_whole,
    require_non_negative,
    require_positive,
    require_probability,
    require_whole,
)
from model_math.core.config.settings import update_config
from model_math.core.values.value_type import ValueType


class TestErrorSink:
    """Test the policies of the error sink."""

    def test_default_policy_records_flag(self):
        trigger_nan("gamma")
        assert has_error(ErrorKind.NAN)
        assert error_flags() == {ErrorKind.NAN: 1}

    def test_flags_accumulate_and_clear(self):
        trigger_invalid_parameter("sigma", -1.0)
        trigger_invalid_parameter("sigma", -2.0)
        trigger_infinity("factorial")
        assert error_flags()[ErrorKind.INVALID_PARAMETER] == 2
        assert error_flags()[ErrorKind.INFINITY] == 1

        clear_error_flags()
        assert not has_error()

    def test_flag_policy_records_without_raising(self):
        update_config(error_policy="flag")
        trigger_can_not_converge("lambert_w", 500)
        assert has_error(ErrorKind.CAN_NOT_CONVERGE)

    @pytest.mark.parametrize("trigger, arguments, exception", [
        (trigger_nan, ("gamma",), NaNError),
        (trigger_infinity, ("factorial",), InfinityError),
        (trigger_invalid_parameter, ("p", 2.0), InvalidParameterError),
        (trigger_type_conversion, (ValueType.COMPLEX, ValueType.REAL), TypeConversionError),
        (trigger_can_not_converge, ("zeta", 100), CanNotConvergeError),
    ])
    def test_raise_policy(self, trigger, arguments, exception):
        with error_policy("raise"):
            with pytest.raises(exception):
                trigger(*arguments)

    def test_raise_policy_still_records_flag(self, raising):
        with pytest.raises(ModelMathError):
            trigger_nan()
        assert has_error(ErrorKind.NAN)

    def test_error_policy_restores_previous(self):
        with error_policy("raise"):
            pass
        trigger_nan()
        assert has_error(ErrorKind.NAN)

    def test_range_and_string_errors_always_raise(self):
        update_config(error_policy="flag")
        with pytest.raises(InvalidRangeError):
            trigger_invalid_range(3, 1)
        with pytest.raises(MalformedStringError) as info:
            trigger_malformed_string(7)
        assert info.value.get_detail("byte_offset") == 7

    def test_type_conversion_message_names_types(self, raising):
        with pytest.raises(TypeConversionError, match="COMPLEX to REAL"):
            trigger_type_conversion(ValueType.COMPLEX, ValueType.REAL)


class TestExceptions:
    """Test the exception hierarchy."""

    def test_details_in_string(self):
        error = InvalidParameterError("Invalid parameter value", parameter="sigma", value=-1.0)
        assert "parameter=sigma" in str(error)
        assert error.parameter == "sigma"

    def test_add_detail_chains(self):
        error = ModelMathError("boom").add_detail("function", "erf")
        assert error.get_detail("function") == "erf"
        assert error.get_detail("missing", 3) == 3

    def test_cause_in_string(self):
        error = ModelMathError("outer", cause=ValueError("inner"))
        assert "Caused by: inner" in str(error)

    def test_named_details_become_attributes(self):
        error = CanNotConvergeError("stuck", kernel="zeta")
        assert error.kernel == "zeta"
        assert error.iterations is None
        assert "iterations" not in error.details

    def test_unknown_detail_name(self):
        with pytest.raises(TypeError):
            NaNError("nan", parameter="x")

    def test_check_index(self):
        assert check_index(3, 1, 3, "index") == 3
        assert check_index(10, 1, None, "index") == 10
        with pytest.raises(InvalidRangeError) as info:
            check_index(0, 1, 3, "row")
        assert (info.value.start, info.value.end) == (1, 3)


class TestConstants:
    """Test the factorial tables."""

    def test_factorial_table_until_overflow(self):
        table = factorial_table()
        assert len(table) >= 171
        assert table[10] == 3628800.0
        assert math.isfinite(table[-1])
        assert math.isinf(table[-1] * len(table))

    def test_tables_are_read_only(self):
        with pytest.raises(ValueError):
            factorial_table()[0] = 2.0
        with pytest.raises(ValueError):
            log_factorial_table()[0] = 2.0

    def test_log_factorial_table_parallel(self):
        assert len(log_factorial_table()) == len(factorial_table())
        assert log_factorial_table()[20] == pytest.approx(math.lgamma(21), rel=1e-14)

    def test_integer_limits(self):
        assert INTEGER_MAX == 9223372036854775807
        assert INTEGER_MIN == -INTEGER_MAX - 1


class TestValidation:
    """Test the parameter checks."""

    def test_is_whole(self):
        assert is_whole(3.0)
        assert is_whole(-2)
        assert not is_whole(2.5)
        assert not is_whole(math.inf)
        assert not is_whole(math.nan)

    def test_failed_check_reports(self):
        assert not require_positive(0.0, "sigma")
        assert has_error(ErrorKind.INVALID_PARAMETER)

    def test_nan_fails_silently(self):
        assert not require_positive(math.nan, "sigma")
        assert not require_probability(math.nan)
        assert not has_error()

    def test_passing_checks(self):
        assert require_positive(1e-300, "x")
        assert require_non_negative(0, "n")
        assert require_probability(1.0)
        assert require_whole(4.0, "k")
        assert not has_error()

    def test_whole_check(self, raising):
        with pytest.raises(InvalidParameterError):
            require_whole(1.5, "k")
