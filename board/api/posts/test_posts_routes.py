# board/api/posts/test_posts_routes.py
"""
게시글 API 엔드포인트 테스트

사용법: python -m pytest board/api/posts/test_posts_routes.py -v
"""

NEW_POST = {"title": "A", "body": "B", "image": ""}


def _create(client, headers, body=None):
    res = client.post('/api/posts/', json=body or NEW_POST, headers=headers)
    assert res.status_code == 201
    return res.get_json()

def test_create_post(client, auth_headers):
    post = _create(client, auth_headers("user-x"))

    assert post["owner"] == "user-x"
    assert post["likes"] == 0
    assert post["comments"] == []
    assert post["updated_at"] is None
    assert post["created_at"].startswith("2024-01-15T10:30:00")

def test_create_post_requires_token(client):
    res = client.post('/api/posts/', json=NEW_POST)
    assert res.status_code == 401

def test_create_post_validation_error(client, auth_headers):
    res = client.post('/api/posts/', json={"title": ""}, headers=auth_headers("user-x"))
    assert res.status_code == 400
    body = res.get_json()
    assert body["error_code"] == "VALIDATION_ERROR"
    assert "body" in body["details"]
    assert "image" in body["details"]

def test_list_and_get_posts_without_login(client, auth_headers):
    created = _create(client, auth_headers("user-x"))

    res = client.get('/api/posts/')
    assert res.status_code == 200
    assert [p["id"] for p in res.get_json()["posts"]] == [created["id"]]

    res = client.get(f'/api/posts/{created["id"]}')
    assert res.status_code == 200
    assert res.get_json() == created

def test_get_missing_post(client):
    res = client.get('/api/posts/missing')
    assert res.status_code == 404
    body = res.get_json()
    assert body["error_code"] == "POST_NOT_FOUND"
    assert "missing" in body["message"]

def test_update_post_owner_and_non_owner(client, auth_headers):
    created = _create(client, auth_headers("user-x"))
    changes = {"title": "A2", "body": "B2", "image": "https://example.com/a.png"}

    res = client.patch(f'/api/posts/{created["id"]}', json=changes, headers=auth_headers("user-y"))
    assert res.status_code == 403
    assert res.get_json()["error_code"] == "FORBIDDEN"

    res = client.patch(f'/api/posts/{created["id"]}', json=changes, headers=auth_headers("user-x"))
    assert res.status_code == 200
    updated = res.get_json()
    assert updated["title"] == "A2"
    assert updated["updated_at"] is not None

def test_update_missing_post(client, auth_headers):
    res = client.patch('/api/posts/missing', json=NEW_POST, headers=auth_headers("user-x"))
    assert res.status_code == 404

def test_like_post(client, auth_headers):
    created = _create(client, auth_headers("user-x"))
    for _ in range(2):
        res = client.post(f'/api/posts/{created["id"]}/like', headers=auth_headers("user-y"))
        assert res.status_code == 200
    assert res.get_json()["likes"] == 2

def test_like_missing_post(client, auth_headers):
    res = client.post('/api/posts/missing/like', headers=auth_headers("user-y"))
    assert res.status_code == 404

def test_delete_post(client, auth_headers):
    created = _create(client, auth_headers("user-x"))
    client.post(f'/api/posts/{created["id"]}/comments', json={"content": "hi"}, headers=auth_headers("user-y"))

    res = client.delete(f'/api/posts/{created["id"]}', headers=auth_headers("user-y"))
    assert res.status_code == 403

    res = client.delete(f'/api/posts/{created["id"]}', headers=auth_headers("user-x"))
    assert res.status_code == 200
    assert len(res.get_json()["comments"]) == 1

    assert client.get(f'/api/posts/{created["id"]}').status_code == 404
    assert client.get(f'/api/posts/{created["id"]}/comments').status_code == 404

def test_delete_missing_post(client, auth_headers):
    res = client.delete('/api/posts/missing', headers=auth_headers("user-x"))
    assert res.status_code == 404

def test_unrelated_value_error_is_not_reported_as_missing_post(client, service, monkeypatch):
    """저장소 레코드 변환 오류 같은 일반 ValueError 는 404 가 아니라 500 이어야 함"""
    def _broken_get_post(post_id):
        raise ValueError("잘못된 ISO 날짜 형식입니다: not-a-date")
    monkeypatch.setattr(service, "get_post", _broken_get_post)

    res = client.get('/api/posts/p-1')

    assert res.status_code == 500
    assert res.get_json()["error_code"] == "INTERNAL_SERVER_ERROR"

def test_unrelated_value_error_on_like_is_internal_error(client, service, auth_headers, monkeypatch):
    def _broken_like_post(post_id):
        raise ValueError("datetime으로 변환할 수 없는 값입니다")
    monkeypatch.setattr(service, "like_post", _broken_like_post)

    res = client.post('/api/posts/p-1/like', headers=auth_headers("user-y"))

    assert res.status_code == 500
