from analytics.ranges import PRICE_RANGES, bucket_case_sql, label_for


def test_ranges_cover_zero_to_nine_hundred_in_steps_of_one_hundred():
    bounded = [r.upper for r in PRICE_RANGES if r.upper is not None]
    assert bounded == [100, 200, 300, 400, 500, 600, 700, 800, 900]
    assert PRICE_RANGES[-1].upper is None


def test_labels():
    assert [r.label for r in PRICE_RANGES] == [
        "0 - 100",
        "101 - 200",
        "201 - 300",
        "301 - 400",
        "401 - 500",
        "501 - 600",
        "601 - 700",
        "701 - 800",
        "801 - 900",
        "901-above",
    ]
    assert label_for(0) == "0 - 100"
    assert label_for(9) == "901-above"


def test_case_sql_tests_upper_bounds_in_order():
    sql = bucket_case_sql("price")
    assert sql.startswith("CASE WHEN price <= 100 THEN 0 WHEN price <= 200 THEN 1")
    assert "WHEN price <= 900 THEN 8" in sql
    assert sql.endswith("ELSE 9 END")
    # Boundary values belong to the lower range: "<=" never "<".
    assert " < " not in sql


def test_case_sql_uses_given_column():
    assert "WHEN p.price <= 100 THEN 0" in bucket_case_sql("p.price")
