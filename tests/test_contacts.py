import pytest

from guardian.models.emergency import EmergencyContact


def _contact(name, phone, relationship="Friend", **extra):
    return {"name": name, "phone": phone, "relationship": relationship, **extra}


@pytest.mark.asyncio
async def test_add_and_list_contacts(async_client, make_user):
    _, headers = make_user()

    r = await async_client.post("/emergency/contacts", json=_contact("Ravi", "98765 43211", "Brother"), headers=headers)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["success"] is True
    assert body["contact"]["phone"] == "+919876543211"
    assert body["contact"]["relationship"] == "Brother"
    assert body["contact"]["priority"] == 1

    r = await async_client.post("/emergency/contacts", json=_contact("Meena", "+1 415 555 0100", priority=2), headers=headers)
    assert r.status_code == 200, r.text

    r = await async_client.get("/emergency/contacts", headers=headers)
    assert r.status_code == 200, r.text
    names = [c["name"] for c in r.json()["contacts"]]
    assert names == ["Ravi", "Meena"]


@pytest.mark.asyncio
async def test_add_contact_requires_fields(async_client, make_user):
    _, headers = make_user()

    r = await async_client.post("/emergency/contacts", json=_contact("  ", "9876543211"), headers=headers)
    assert r.status_code == 400, r.text
    assert r.json()["error"] == "validation"


@pytest.mark.asyncio
async def test_priority_is_clamped(async_client, make_user):
    _, headers = make_user()

    r = await async_client.post("/emergency/contacts", json=_contact("High", "9876500001", priority=9), headers=headers)
    assert r.status_code == 200, r.text
    assert r.json()["contact"]["priority"] == 3

    r = await async_client.post("/emergency/contacts", json=_contact("Low", "9876500002", priority=0), headers=headers)
    assert r.status_code == 200, r.text
    assert r.json()["contact"]["priority"] == 1


@pytest.mark.asyncio
async def test_sixth_contact_is_rejected(async_client, make_user, db_session):
    user, headers = make_user()

    for i in range(5):
        r = await async_client.post("/emergency/contacts", json=_contact(f"C{i}", f"987650010{i}"), headers=headers)
        assert r.status_code == 200, r.text

    r = await async_client.post("/emergency/contacts", json=_contact("C5", "9876500105"), headers=headers)
    assert r.status_code == 400, r.text
    assert r.json()["detail"] == "Maximum 5 emergency contacts allowed"
    assert r.json()["error"] == "conflict"

    db_session.expire_all()
    assert db_session.query(EmergencyContact).filter(EmergencyContact.user_id == user.id).count() == 5


@pytest.mark.asyncio
async def test_duplicate_phone_after_normalization_is_rejected(async_client, make_user, db_session):
    user, headers = make_user()

    r = await async_client.post("/emergency/contacts", json=_contact("Ravi", "9876543211"), headers=headers)
    assert r.status_code == 200, r.text

    r = await async_client.post("/emergency/contacts", json=_contact("Ravi again", "91 98765 43211"), headers=headers)
    assert r.status_code == 400, r.text
    assert r.json()["detail"] == "This phone number is already added as an emergency contact"

    db_session.expire_all()
    assert db_session.query(EmergencyContact).filter(EmergencyContact.user_id == user.id).count() == 1


@pytest.mark.asyncio
async def test_same_phone_allowed_for_different_users(async_client, make_user):
    _, first = make_user()
    _, second = make_user()

    r = await async_client.post("/emergency/contacts", json=_contact("Shared", "9876543299"), headers=first)
    assert r.status_code == 200, r.text
    r = await async_client.post("/emergency/contacts", json=_contact("Shared", "9876543299"), headers=second)
    assert r.status_code == 200, r.text


@pytest.mark.asyncio
async def test_update_contact_is_partial(async_client, make_user):
    _, headers = make_user()
    r = await async_client.post("/emergency/contacts", json=_contact("Ravi", "9876543211", "Brother"), headers=headers)
    contact_id = r.json()["contact"]["id"]

    r = await async_client.put(f"/emergency/contacts/{contact_id}", json={"phone": "(987) 654-3212"}, headers=headers)
    assert r.status_code == 200, r.text
    contact = r.json()["contact"]
    assert contact["phone"] == "+919876543212"
    assert contact["name"] == "Ravi"
    assert contact["relationship"] == "Brother"


@pytest.mark.asyncio
async def test_update_to_existing_phone_is_rejected(async_client, make_user):
    _, headers = make_user()
    await async_client.post("/emergency/contacts", json=_contact("A", "9876543211"), headers=headers)
    r = await async_client.post("/emergency/contacts", json=_contact("B", "9876543212"), headers=headers)
    contact_id = r.json()["contact"]["id"]

    r = await async_client.put(f"/emergency/contacts/{contact_id}", json={"phone": "+919876543211"}, headers=headers)
    assert r.status_code == 400, r.text

    # Re-saving its own number is not a duplicate
    r = await async_client.put(f"/emergency/contacts/{contact_id}", json={"phone": "9876543212"}, headers=headers)
    assert r.status_code == 200, r.text


@pytest.mark.asyncio
async def test_delete_contact(async_client, make_user, db_session):
    user, headers = make_user()
    r = await async_client.post("/emergency/contacts", json=_contact("Ravi", "9876543211"), headers=headers)
    contact_id = r.json()["contact"]["id"]

    r = await async_client.delete(f"/emergency/contacts/{contact_id}", headers=headers)
    assert r.status_code == 200, r.text
    assert r.json() == {"success": True, "message": "Emergency contact deleted successfully"}

    db_session.expire_all()
    assert db_session.query(EmergencyContact).filter(EmergencyContact.id == contact_id).first() is None


@pytest.mark.asyncio
async def test_cannot_touch_another_users_contact(async_client, make_user):
    _, owner = make_user()
    _, other = make_user()
    r = await async_client.post("/emergency/contacts", json=_contact("Ravi", "9876543211"), headers=owner)
    contact_id = r.json()["contact"]["id"]

    r = await async_client.delete(f"/emergency/contacts/{contact_id}", headers=other)
    assert r.status_code == 404, r.text
    assert r.json()["detail"] == "Contact not found"

    r = await async_client.put(f"/emergency/contacts/{contact_id}", json={"name": "X"}, headers=other)
    assert r.status_code == 404, r.text


@pytest.mark.asyncio
async def test_contacts_require_auth(async_client):
    r = await async_client.get("/emergency/contacts")
    assert r.status_code in (401, 403)


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["phone", "name", "relationship"])
async def test_update_with_blank_field_is_rejected(async_client, make_user, db_session, field):
    _, headers = make_user()
    r = await async_client.post("/emergency/contacts", json=_contact("Ravi", "9876543211", "Brother"), headers=headers)
    contact_id = r.json()["contact"]["id"]

    r = await async_client.put(f"/emergency/contacts/{contact_id}", json={field: "   "}, headers=headers)
    assert r.status_code == 400, r.text
    assert r.json()["error"] == "validation"

    db_session.expire_all()
    stored = db_session.get(EmergencyContact, contact_id)
    assert (stored.name, stored.phone, stored.relation) == ("Ravi", "+919876543211", "Brother")
