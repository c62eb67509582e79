"""
Tests for the query gateway.
Covers the lookup, insert, reservation and search behaviour end to end against a database.
"""

import pytest

from lightbnb.database import Database
from lightbnb.gateway import QueryGateway
from lightbnb.repositories import PropertySearchFilters
from lightbnb.utils.exceptions import ConstraintViolationError, ValidationError
from tests.conftest import (
    UserFactory,
    PropertyFactory,
    add_reservation,
    add_review,
    assert_property_matches
)


class TestUsers:

    @pytest.mark.asyncio
    async def test_get_user_with_email_any_case(self, gateway: QueryGateway):
        stored = await UserFactory.create_user(gateway, email="Kate.Rivera@Example.com")

        for email in ("kate.rivera@example.com", "KATE.RIVERA@EXAMPLE.COM", "kAtE.rIvErA@example.com"):
            assert await gateway.get_user_with_email(email) == stored

    @pytest.mark.asyncio
    async def test_get_user_with_email_not_found(self, gateway: QueryGateway):
        await UserFactory.create_user(gateway, email="someone@example.com")
        assert await gateway.get_user_with_email("someone-else@example.com") is None

    @pytest.mark.asyncio
    async def test_add_user_then_get_by_id(self, gateway: QueryGateway):
        user_data = UserFactory.create_user_data(name="Devin Sanders", email="devin@example.com")

        created = await gateway.add_user(user_data)
        fetched = await gateway.get_user_with_id(created["id"])

        assert fetched is not None
        for field, value in user_data.items():
            assert fetched[field] == value

    @pytest.mark.asyncio
    async def test_get_user_with_id_not_found(self, gateway: QueryGateway):
        assert await gateway.get_user_with_id(12345) is None

    @pytest.mark.asyncio
    async def test_add_user_duplicate_email(self, gateway: QueryGateway):
        await UserFactory.create_user(gateway, email="taken@example.com")

        with pytest.raises(ConstraintViolationError) as exc_info:
            await UserFactory.create_user(gateway, email="taken@example.com")

        assert exc_info.value.status_code == 409

    @pytest.mark.asyncio
    async def test_add_user_missing_fields(self, gateway: QueryGateway):
        with pytest.raises(ValidationError) as exc_info:
            await gateway.add_user({"name": "No Email"})

        fields = [error["field"] for error in exc_info.value.field_errors]
        assert fields == ["email", "password"]


class TestReservations:

    @pytest.mark.asyncio
    async def test_get_all_reservations(self, database: Database, gateway: QueryGateway, test_owner, test_guest):
        prop = await PropertyFactory.create_property(gateway, test_owner["id"])
        await add_reservation(database, test_guest["id"], prop["id"])
        other_guest = await UserFactory.create_user(gateway)
        await add_reservation(database, other_guest["id"], prop["id"])

        reservations = await gateway.get_all_reservations(test_guest["id"])

        assert len(reservations) == 1
        assert reservations[0]["guest_id"] == test_guest["id"]
        assert reservations[0]["cost_per_night"] == prop["cost_per_night"]

    @pytest.mark.asyncio
    async def test_get_all_reservations_default_limit(self, database: Database, gateway: QueryGateway, test_owner, test_guest):
        prop = await PropertyFactory.create_property(gateway, test_owner["id"])
        for _ in range(12):
            await add_reservation(database, test_guest["id"], prop["id"])

        assert len(await gateway.get_all_reservations(test_guest["id"])) == 10
        assert len(await gateway.get_all_reservations(test_guest["id"], limit=3)) == 3

    @pytest.mark.asyncio
    async def test_get_all_reservations_none_is_empty_list(self, gateway: QueryGateway, test_guest):
        assert await gateway.get_all_reservations(test_guest["id"]) == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [0, -1, "10", 2.5, True])
    async def test_invalid_limit(self, gateway: QueryGateway, limit):
        with pytest.raises(ValidationError):
            await gateway.get_all_reservations(1, limit=limit)


class TestPropertySearch:

    @pytest.fixture
    async def listings(self, database: Database, gateway: QueryGateway, test_owner, test_guest):
        """Four properties: three reviewed at different prices and ratings, one unreviewed."""
        other_owner = await UserFactory.create_user(gateway, name="Other Owner")
        cheap = await PropertyFactory.create_property(
            gateway, test_owner["id"], title="Cheap", cost_per_night=4000, city="Vancouver"
        )
        middle = await PropertyFactory.create_property(
            gateway, other_owner["id"], title="Middle", cost_per_night=9900, city="North Vancouver"
        )
        pricey = await PropertyFactory.create_property(
            gateway, other_owner["id"], title="Pricey", cost_per_night=15000, city="Calgary"
        )
        unreviewed = await PropertyFactory.create_property(
            gateway, test_owner["id"], title="Unreviewed", cost_per_night=7500, city="Vancouver"
        )

        await add_review(database, test_guest["id"], cheap["id"], 2)
        await add_review(database, test_guest["id"], cheap["id"], 3)
        await add_review(database, test_guest["id"], middle["id"], 4)
        await add_review(database, test_guest["id"], middle["id"], 5)
        await add_review(database, test_guest["id"], pricey["id"], 4)

        return {
            "cheap": cheap,
            "middle": middle,
            "pricey": pricey,
            "unreviewed": unreviewed,
            "owner": test_owner,
        }

    @pytest.mark.asyncio
    async def test_no_filters_orders_by_price_and_excludes_unreviewed(self, gateway: QueryGateway, listings):
        results = await gateway.get_all_properties({})

        assert [r["title"] for r in results] == ["Cheap", "Middle", "Pricey"]
        prices = [r["cost_per_night"] for r in results]
        assert prices == sorted(prices)

    @pytest.mark.asyncio
    async def test_average_rating_is_reported(self, gateway: QueryGateway, listings):
        results = await gateway.get_all_properties({})

        ratings = {r["title"]: float(r["average_rating"]) for r in results}
        assert ratings == {"Cheap": 2.5, "Middle": 4.5, "Pricey": 4.0}

    @pytest.mark.asyncio
    async def test_city_substring(self, gateway: QueryGateway, listings):
        results = await gateway.get_all_properties({"city": "ancouv"})
        assert [r["title"] for r in results] == ["Cheap", "Middle"]

    @pytest.mark.asyncio
    async def test_price_range_in_dollars(self, gateway: QueryGateway, listings):
        results = await gateway.get_all_properties({
            "minimum_price_per_night": 50,
            "maximum_price_per_night": 150,
        })

        assert [r["title"] for r in results] == ["Middle", "Pricey"]
        for record in results:
            assert 50 <= record["cost_per_night"] / 100 <= 150

    @pytest.mark.asyncio
    async def test_price_range_bounds_are_inclusive(self, gateway: QueryGateway, listings):
        # Cheap costs exactly $40 and Middle exactly $99
        results = await gateway.get_all_properties({
            "minimum_price_per_night": 40,
            "maximum_price_per_night": 99,
        })

        assert [r["title"] for r in results] == ["Cheap", "Middle"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bound", ["abc", "inf", float("nan")])
    async def test_non_numeric_price_bound(self, gateway: QueryGateway, listings, bound):
        with pytest.raises(ValidationError) as exc_info:
            await gateway.get_all_properties({"minimum_price_per_night": bound, "maximum_price_per_night": 5})

        assert exc_info.value.field_errors[0]["field"] == "minimum_price_per_night"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("city", ["%", "_ancouver", "Van%"])
    async def test_city_wildcards_match_literally(self, gateway: QueryGateway, listings, city):
        assert await gateway.get_all_properties({"city": city}) == []

    @pytest.mark.asyncio
    async def test_single_price_bound_applies_no_filter(self, gateway: QueryGateway, listings):
        only_min = await gateway.get_all_properties({"minimum_price_per_night": 100})
        only_max = await gateway.get_all_properties({"maximum_price_per_night": 45})

        assert len(only_min) == 3
        assert len(only_max) == 3

    @pytest.mark.asyncio
    async def test_minimum_rating(self, gateway: QueryGateway, listings):
        results = await gateway.get_all_properties({"minimum_rating": 4})

        assert [r["title"] for r in results] == ["Middle", "Pricey"]
        assert all(float(r["average_rating"]) >= 4 for r in results)

    @pytest.mark.asyncio
    async def test_combined_filters(self, gateway: QueryGateway, listings):
        results = await gateway.get_all_properties({
            "city": "Vancouver",
            "minimum_price_per_night": 30,
            "maximum_price_per_night": 100,
            "minimum_rating": 3,
        })

        assert [r["title"] for r in results] == ["Middle"]

    @pytest.mark.asyncio
    async def test_limit(self, gateway: QueryGateway, listings):
        results = await gateway.get_all_properties({}, limit=2)
        assert [r["title"] for r in results] == ["Cheap", "Middle"]

    @pytest.mark.asyncio
    async def test_no_match_is_empty_list(self, gateway: QueryGateway, listings):
        assert await gateway.get_all_properties({"city": "Atlantis"}) == []

    @pytest.mark.asyncio
    async def test_owner_filter_ignores_other_filters(self, gateway: QueryGateway, listings):
        owner_id = listings["owner"]["id"]

        results = await gateway.get_all_properties(
            {"owner_id": owner_id, "city": "Calgary", "minimum_rating": 5},
            limit=10
        )

        assert sorted(r["title"] for r in results) == ["Cheap", "Unreviewed"]
        assert all(r["owner_id"] == owner_id for r in results)

    @pytest.mark.asyncio
    async def test_owner_filter_respects_limit(self, gateway: QueryGateway, listings):
        results = await gateway.get_all_properties({"owner_id": listings["owner"]["id"]}, limit=1)
        assert len(results) == 1

    @pytest.mark.asyncio
    async def test_accepts_filter_object(self, gateway: QueryGateway, listings):
        results = await gateway.get_all_properties(PropertySearchFilters(city="Calgary"))
        assert [r["title"] for r in results] == ["Pricey"]


class TestAddProperty:

    @pytest.mark.asyncio
    async def test_add_property_then_find_by_owner(self, gateway: QueryGateway, test_owner):
        data = PropertyFactory.create_property_data(
            test_owner["id"],
            title="Seaside cabin",
            cost_per_night=12550,
            city="Tofino",
            parking_spaces=2,
            number_of_bathrooms=1,
            number_of_bedrooms=4
        )

        created = await gateway.add_property(data)
        found = await gateway.get_all_properties({"owner_id": test_owner["id"]})

        assert_property_matches(created, data)
        assert len(found) == 1
        assert found[0]["id"] == created["id"]
        assert_property_matches(found[0], data)

    @pytest.mark.asyncio
    async def test_add_property_missing_fields(self, gateway: QueryGateway, test_owner):
        data = PropertyFactory.create_property_data(test_owner["id"])
        del data["post_code"]

        with pytest.raises(ValidationError) as exc_info:
            await gateway.add_property(data)

        assert "post_code" in exc_info.value.detail
