"""Unit tests for descriptor and post loading."""
import json

import pytest

from avatar_matching.data_loading import load_avatar, load_avatars_csv, load_posts
from avatar_matching.matching import normalize


class TestLoadAvatar:
    def test_plain_descriptor(self, tmp_path):
        path = tmp_path / "me.json"
        path.write_text(json.dumps({"hairColor": "black"}))
        assert load_avatar(str(path)) == {"hairColor": "black"}

    def test_stored_record(self, tmp_path):
        path = tmp_path / "me.json"
        path.write_text(json.dumps({"id": "a1", "config": {"hairColor": "red"}, "version": 1}))
        assert normalize(load_avatar(str(path)))["hairColor"] == "red"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_avatar(str(tmp_path / "missing.json"))

    def test_empty_file(self, tmp_path):
        path = tmp_path / "me.json"
        path.write_text("")
        with pytest.raises(ValueError):
            load_avatar(str(path))

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "me.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError):
            load_avatar(str(path))


class TestLoadPosts:
    def test_json_list(self, tmp_path):
        posts = [{"id": 1, "target_avatar": {"hairColor": "black"}}, {"id": 2}]
        path = tmp_path / "posts.json"
        path.write_text(json.dumps(posts))
        assert load_posts(str(path)) == posts

    def test_json_must_be_list(self, tmp_path):
        path = tmp_path / "posts.json"
        path.write_text(json.dumps({"id": 1}))
        with pytest.raises(ValueError):
            load_posts(str(path))

    def test_csv_blank_cells_are_missing(self, tmp_path):
        path = tmp_path / "posts.csv"
        path.write_text(
            "id,title,hairColor,eyeColor\n"
            "p1,Coffee shop,black,blue\n"
            "p2,,blonde,\n"
        )
        posts = load_posts(str(path))
        assert posts[0] == {
            "id": "p1", "title": "Coffee shop",
            "target_avatar": {"hairColor": "black", "eyeColor": "blue"},
        }
        assert posts[1] == {"id": "p2", "target_avatar": {"hairColor": "blonde"}}

    def test_csv_custom_avatar_key(self, tmp_path):
        path = tmp_path / "posts.csv"
        path.write_text("id,hairColor\np1,red\n")
        assert load_posts(str(path), avatar_key="wanted")[0]["wanted"] == {"hairColor": "red"}


class TestLoadAvatarsCsv:
    def test_rows(self, tmp_path):
        path = tmp_path / "avatars.csv"
        path.write_text("name,skinTone,glasses\nann,fair1,round\nbo,dark2,\n")
        assert load_avatars_csv(str(path)) == [
            {"skinTone": "fair1", "glasses": "round"},
            {"skinTone": "dark2"},
        ]

    def test_no_attribute_columns(self, tmp_path):
        path = tmp_path / "avatars.csv"
        path.write_text("name,age\nann,30\n")
        with pytest.raises(ValueError):
            load_avatars_csv(str(path))
