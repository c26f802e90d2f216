from typing import Any, Mapping, Sequence


class EmptyUpdateError(ValueError):
    """업데이트할 필드가 하나도 없을 때 (400 Bad Request)"""

    def __init__(self, message: str = "No data"):
        super().__init__(message)
        self.message = message


def build_set_clause(
    update_fields: Mapping[str, Any],
    column_map: Mapping[str, str]
) -> tuple[str, list[Any]]:
    """
    부분 업데이트용 UPDATE SET 절 생성.

    Args:
        update_fields: 업데이트할 필드와 값 {"firstName": "Aliya", "age": 32}
            삽입 순서가 곧 placeholder 번호 순서
        column_map: 필드 -> DB 컬럼 매핑 {"firstName": "first_name"}
            매핑이 없는 필드는 필드명을 그대로 컬럼명으로 사용

    Returns:
        (set_clause, values) 튜플
        - set_clause: '"first_name"=$1, "age"=$2'
        - values: ["Aliya", 32]

    Raises:
        EmptyUpdateError: update_fields가 비어 있는 경우

    Example:
        >>> clause, values = build_set_clause(
        ...     {"firstName": "Aliya", "age": 32},
        ...     {"firstName": "first_name"},
        ... )
        >>> clause
        '"first_name"=$1, "age"=$2'
        >>> values
        ['Aliya', 32]

    WHERE 절의 placeholder는 호출하는 쪽에서 len(values) + 1 부터 이어 붙인다.
    """
    if not update_fields:
        raise EmptyUpdateError("No data")

    set_parts = []
    values = []

    for idx, (field_name, value) in enumerate(update_fields.items(), start=1):
        column_name = column_map[field_name] if field_name in column_map else field_name
        # 값은 절대 문자열에 넣지 않고 placeholder로만 바인딩
        set_parts.append(f'"{column_name}"=${idx}')
        values.append(value)

    return ", ".join(set_parts), values


def build_where_clause(
    conditions: Sequence[tuple[str, Any]],
    start: int = 1
) -> tuple[str, list[Any]]:
    """
    목록 조회용 WHERE 절 생성.

    conditions의 각 템플릿은 placeholder 자리에 {} 하나를 가진다.
        [("name ILIKE {}", "%net%"), ("num_employees >= {}", 10)]
        -> ("WHERE name ILIKE $1 AND num_employees >= $2", ["%net%", 10])
    """
    where_parts = []
    values = []

    for idx, (template, value) in enumerate(conditions, start=start):
        where_parts.append(template.format(f"${idx}"))
        values.append(value)

    if not where_parts:
        return "", values
    return "WHERE " + " AND ".join(where_parts), values
