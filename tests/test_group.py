"""Tests for the group blueprint."""

from tests.helpers import PlanPalTestCase


class GroupRoutesTestCase(PlanPalTestCase):
    """Test case for the group registry."""

    def setUp(self):
        super().setUp()
        self.owner_token, self.owner = self.signup("owner@example.com", "Owner")
        self.member_token, self.member = self.signup("member@example.com", "Member")

    def test_create_group(self):
        """The creator becomes the only member and earns points."""
        group = self.create_group(self.owner_token, "Movie Buffs", description="Films")

        self.assertEqual(group["name"], "Movie Buffs")
        self.assertEqual(group["members"], [self.owner["id"]])
        self.assertFalse(group["hasPassword"])
        self.assertEqual(self.points(self.owner["id"]), 150)

        profile = self.client.get(f"/profile/{self.owner['id']}").get_json()
        self.assertEqual(profile["groups"], [group["id"]])

    def test_create_group_requires_name(self):
        response = self.client.post(
            "/groups", json={"name": "  "}, headers=self.auth(self.owner_token)
        )
        self.assertEqual(response.status_code, 400)

    def test_create_group_requires_auth(self):
        response = self.client.post("/groups", json={"name": "Nope"})
        self.assertEqual(response.status_code, 401)

    def test_create_group_for_someone_else_forbidden(self):
        response = self.client.post(
            "/groups",
            json={"name": "Spoof", "creatorId": self.member["id"]},
            headers=self.auth(self.owner_token),
        )
        self.assertEqual(response.status_code, 403)

    def test_join_group(self):
        group = self.create_group(self.owner_token)
        joined = self.join_group(self.member_token, group["id"])

        self.assertTrue(joined["joined"])
        self.assertEqual(joined["members"], [self.owner["id"], self.member["id"]])
        self.assertEqual(self.points(self.member["id"]), 125)

    def test_join_group_twice_is_a_no_op(self):
        group = self.create_group(self.owner_token)
        self.join_group(self.member_token, group["id"])
        again = self.join_group(self.member_token, group["id"])

        self.assertFalse(again["joined"])
        self.assertEqual(again["members"].count(self.member["id"]), 1)
        self.assertEqual(self.points(self.member["id"]), 125)

    def test_join_unknown_group(self):
        response = self.client.post(
            "/groups/missing/join", json={}, headers=self.auth(self.member_token)
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()["error"], "Group not found")

    def test_password_protected_group(self):
        """The password is hashed, never returned, and checked on join."""
        group = self.create_group(self.owner_token, password="s3cret")
        self.assertTrue(group["hasPassword"])
        self.assertNotIn("passwordHash", group)
        self.assertNotIn("s3cret", str(self.client.get(f"/groups/{group['id']}").data))

        response = self.client.post(
            f"/groups/{group['id']}/join",
            json={"password": "wrong"},
            headers=self.auth(self.member_token),
        )
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.get_json()["error"], "Incorrect password")

        joined = self.join_group(self.member_token, group["id"], password="s3cret")
        self.assertTrue(joined["joined"])

    def test_list_groups(self):
        first = self.create_group(self.owner_token, "First")
        second = self.create_group(self.member_token, "Second")

        everyone = self.client.get("/groups").get_json()
        self.assertEqual([g["id"] for g in everyone], [first["id"], second["id"]])

        mine = self.client.get("/groups/mine", headers=self.auth(self.owner_token))
        self.assertEqual([g["id"] for g in mine.get_json()], [first["id"]])

    def test_get_group(self):
        group = self.create_group(self.owner_token)
        response = self.client.get(f"/groups/{group['id']}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()["name"], "Movie Buffs")

    def test_group_master_badge(self):
        """Belonging to five groups earns the Group Master badge."""
        for i in range(5):
            group = self.create_group(self.owner_token, f"Group {i}")
            self.join_group(self.member_token, group["id"])

        rewards = self.client.get(f"/rewards/{self.member['id']}").get_json()
        badge_ids = [b["badgeId"] for b in rewards["badges"]]
        self.assertIn("GROUP_MASTER", badge_ids)
        self.assertEqual(badge_ids.count("GROUP_MASTER"), 1)
