from app.application.services.access_guard import SessionContext, check_customer_access


def test_missing_context_redirects_to_login():
    decision = check_customer_access(None)
    assert decision.allowed is False
    assert decision.redirect_to == "/login"


def test_missing_role_redirects_to_login():
    decision = check_customer_access(SessionContext(user_id="u1", role=None))
    assert decision.redirect_to == "/login"


def test_barber_goes_to_own_dashboard():
    decision = check_customer_access(SessionContext(user_id="u1", role="barber"))
    assert decision.allowed is False
    assert decision.redirect_to == "/barber/dashboard"


def test_admin_goes_to_own_dashboard():
    decision = check_customer_access(SessionContext(user_id="u1", role="admin"))
    assert decision.redirect_to == "/admin/dashboard"


def test_customer_is_allowed():
    decision = check_customer_access(SessionContext(user_id="u1", role="customer"))
    assert decision.allowed is True
    assert decision.redirect_to is None


def test_unknown_role_goes_to_login_not_a_built_url():
    decision = check_customer_access(SessionContext(user_id="u1", role="/evil.example"))
    assert decision.allowed is False
    assert decision.redirect_to == "/login"
