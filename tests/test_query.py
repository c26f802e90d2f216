import re

import pytest

from utils.query import EmptyUpdateError, build_set_clause, build_where_clause


class TestBuildSetClause:
    """build_set_clause 테스트"""

    def test_single_field(self):
        """필드 하나 업데이트"""
        clause, values = build_set_clause(
            {"firstName": "Aliya"},
            {"firstName": "first_name"},
        )
        assert clause == '"first_name"=$1'
        assert values == ["Aliya"]

    def test_multiple_fields(self):
        """여러 필드 업데이트"""
        clause, values = build_set_clause(
            {"firstName": "Aliya", "age": 32},
            {"firstName": "first_name", "age": "age"},
        )
        assert clause == '"first_name"=$1, "age"=$2'
        assert values == ["Aliya", 32]

    def test_null_values_pass_through(self):
        """None 값도 그대로 바인딩"""
        clause, values = build_set_clause(
            {"name": "New", "numEmployees": None},
            {"numEmployees": "num_employees"},
        )
        assert clause == '"name"=$1, "num_employees"=$2'
        assert values == ["New", None]

    def test_unmapped_field_uses_field_name(self):
        """매핑 없는 필드는 필드명 그대로 컬럼명으로 사용"""
        clause, values = build_set_clause({"title": "Dev", "salary": 100}, {})
        assert clause == '"title"=$1, "salary"=$2'
        assert values == ["Dev", 100]

    def test_empty_string_override_is_used(self):
        """매핑 값이 빈 문자열이어도 필드명으로 대체하지 않음"""
        clause, _ = build_set_clause({"name": "x"}, {"name": ""})
        assert clause == '""=$1'

    def test_ordinals_follow_insertion_order(self):
        """N번째 필드가 $N, values[N-1]과 대응"""
        update_fields = {f"field{i}": i * 10 for i in range(1, 8)}
        clause, values = build_set_clause(update_fields, {"field3": "third"})

        parts = clause.split(", ")
        assert len(parts) == len(values) == len(update_fields)
        for n, (part, (field, value)) in enumerate(zip(parts, update_fields.items()), start=1):
            column = "third" if field == "field3" else field
            assert part == f'"{column}"=${n}'
            assert values[n - 1] == value

    def test_values_never_in_clause(self):
        """값은 SQL 문자열에 들어가지 않음 (SQL Injection 방지)"""
        malicious = "x'; DROP TABLE users; --"
        clause, values = build_set_clause({"name": malicious}, {})
        assert malicious not in clause
        assert values == [malicious]
        assert re.fullmatch(r'"name"=\$1', clause)

    def test_empty_update_raises(self):
        """빈 데이터는 EmptyUpdateError (No data)"""
        with pytest.raises(EmptyUpdateError) as exc_info:
            build_set_clause({}, {"firstName": "first_name"})
        assert str(exc_info.value) == "No data"
        assert exc_info.value.message == "No data"

    def test_empty_update_error_is_value_error(self):
        assert issubclass(EmptyUpdateError, ValueError)


class TestBuildWhereClause:
    """build_where_clause 테스트"""

    def test_no_conditions(self):
        assert build_where_clause([]) == ("", [])

    def test_conditions_joined_with_and(self):
        clause, values = build_where_clause([
            ("name ILIKE {}", "%net%"),
            ("num_employees >= {}", 10),
        ])
        assert clause == "WHERE name ILIKE $1 AND num_employees >= $2"
        assert values == ["%net%", 10]

    def test_start_offset(self):
        """start 이후 번호부터 placeholder 부여"""
        clause, values = build_where_clause([("salary >= {}", 5)], start=3)
        assert clause == "WHERE salary >= $3"
        assert values == [5]
