import pytest

from evictiontracker.intake.domain.models import Account, Tenant


@pytest.mark.parametrize("raw", [True, 1, "true", "True", " yes ", "1"])
def test_tenant_subsidy_flag_coerced(raw):
    tenant = Tenant.from_dict({"tenant_id": "T1", "property_id": "P1", "is_subsidized": raw})

    assert tenant.is_subsidized is True


@pytest.mark.parametrize("raw", [False, 0, 2, None, "", "false", "no", "maybe"])
def test_tenant_subsidy_flag_false(raw):
    tenant = Tenant.from_dict({"tenant_id": "T1", "property_id": "P1", "is_subsidized": raw})

    assert tenant.is_subsidized is False


def test_account_unlocked_flag_coerced():
    account = Account.from_dict(
        {
            "landlord_id": "LL1",
            "price_overrides": {
                "Baltimore City": {"price": "150", "unlocked": "true"},
                "Howard": {"price": "99", "unlocked": 0},
            },
        }
    )

    assert account.price_overrides["Baltimore City"].unlocked is True
    assert account.price_overrides["Howard"].unlocked is False
