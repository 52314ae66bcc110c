# board/api/comments/test_comments_routes.py
"""
댓글 API 엔드포인트 테스트

사용법: python -m pytest board/api/comments/test_comments_routes.py -v
"""


def _create_post(client, headers):
    res = client.post('/api/posts/', json={"title": "A", "body": "B", "image": ""}, headers=headers)
    return res.get_json()["id"]

def test_comment_and_list(client, auth_headers):
    post_id = _create_post(client, auth_headers("user-x"))

    res = client.post(f'/api/posts/{post_id}/comments', json={"content": "hi"}, headers=auth_headers("user-y"))
    assert res.status_code == 201
    comment = res.get_json()
    assert comment["sender"] == "user-y"
    assert comment["post_id"] == post_id

    res = client.get(f'/api/posts/{post_id}/comments')
    assert res.status_code == 200
    assert res.get_json()["comments"] == [comment]

def test_comment_on_missing_post(client, auth_headers):
    res = client.post('/api/posts/missing/comments', json={"content": "hi"}, headers=auth_headers("user-y"))
    assert res.status_code == 404
    assert res.get_json()["error_code"] == "POST_NOT_FOUND"

def test_comment_validation_error(client, auth_headers):
    post_id = _create_post(client, auth_headers("user-x"))
    res = client.post(f'/api/posts/{post_id}/comments', json={"content": ""}, headers=auth_headers("user-y"))
    assert res.status_code == 400
    assert "content" in res.get_json()["details"]

def test_comment_requires_token(client, auth_headers):
    post_id = _create_post(client, auth_headers("user-x"))
    res = client.post(f'/api/posts/{post_id}/comments', json={"content": "hi"})
    assert res.status_code == 401

def test_delete_comment_scenario(client, auth_headers):
    """X 게시글 생성 -> 좋아요 2회 -> Y 댓글 -> X 삭제 시도(403) -> Y 삭제 -> 빈 댓글 목록"""
    post_id = _create_post(client, auth_headers("X"))
    client.post(f'/api/posts/{post_id}/like', headers=auth_headers("X"))
    client.post(f'/api/posts/{post_id}/like', headers=auth_headers("Y"))
    comment_id = client.post(f'/api/posts/{post_id}/comments', json={"content": "hi"}, headers=auth_headers("Y")).get_json()["id"]

    res = client.delete(f'/api/comments/{comment_id}', headers=auth_headers("X"))
    assert res.status_code == 403

    res = client.delete(f'/api/comments/{comment_id}', headers=auth_headers("Y"))
    assert res.status_code == 200
    assert res.get_json()["id"] == comment_id

    assert client.get(f'/api/posts/{post_id}/comments').get_json()["comments"] == []
    post = client.get(f'/api/posts/{post_id}').get_json()
    assert post["likes"] == 2
    assert post["comments"] == []

def test_delete_missing_comment(client, auth_headers):
    res = client.delete('/api/comments/missing', headers=auth_headers("Y"))
    assert res.status_code == 404
    assert res.get_json()["error_code"] == "COMMENT_NOT_FOUND"
