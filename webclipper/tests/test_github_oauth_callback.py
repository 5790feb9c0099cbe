from __future__ import annotations

from conftest import InMemorySessionRepository, InMemoryUserRepository, make_user

from webclipper.application import GitHubOAuthCallbackUseCase
from webclipper.shared.result import Err, Ok


def _callback(users, sessions) -> GitHubOAuthCallbackUseCase:
    return GitHubOAuthCallbackUseCase(users=users, sessions=sessions)


def test_already_linked_user_gets_session(
    users: InMemoryUserRepository, sessions: InMemorySessionRepository
) -> None:
    user = users.save(make_user("alice", github_id="4242"))

    result = _callback(users, sessions).execute("4242", "octocat")

    assert isinstance(result, Ok)
    assert result.value.user == user
    assert result.value.session.user_id == user.id
    assert len(sessions.sessions) == 1


def test_first_github_login_links_the_local_user(
    users: InMemoryUserRepository, sessions: InMemorySessionRepository
) -> None:
    user = users.save(make_user("alice"))

    result = _callback(users, sessions).execute("4242", "octocat")

    assert isinstance(result, Ok)
    stored = users.find_by_id(user.id)
    assert stored is not None
    assert stored.github_id == "4242"
    assert result.value.user.github_linked


def test_linking_is_stable_on_repeat_logins(
    users: InMemoryUserRepository, sessions: InMemorySessionRepository
) -> None:
    users.save(make_user("alice"))
    callback = _callback(users, sessions)

    first = callback.execute("4242", "octocat").unwrap()
    second = callback.execute("4242", "octocat").unwrap()

    assert first.user.id == second.user.id
    assert first.session.id != second.session.id


def test_no_local_user_requires_setup(
    users: InMemoryUserRepository, sessions: InMemorySessionRepository
) -> None:
    result = _callback(users, sessions).execute("4242", "octocat")

    assert isinstance(result, Err)
    assert result.error.code == "OAUTH_ERROR"
    assert result.error.message == "No user account exists. Please set up your account first."
    assert users.count() == 0
    assert sessions.sessions == {}


def test_user_linked_to_other_account_is_rejected(
    users: InMemoryUserRepository, sessions: InMemorySessionRepository
) -> None:
    users.save(make_user("alice", github_id="1111"))

    result = _callback(users, sessions).execute("4242", "octocat")

    assert isinstance(result, Err)
    assert result.error.code == "OAUTH_ERROR"
    assert result.error.message == "Account is already linked to a different GitHub account."
    assert users.find_by_github_id("1111") is not None
    assert sessions.sessions == {}


def test_storage_failure_is_returned(
    users: InMemoryUserRepository, sessions: InMemorySessionRepository
) -> None:
    users.save(make_user("alice"))
    sessions.fail = True

    result = _callback(users, sessions).execute("4242", "octocat")

    assert isinstance(result, Err)
    assert result.error.code == "STORAGE_ERROR"


def test_link_then_conflict_then_login_sequence(
    users: InMemoryUserRepository, sessions: InMemorySessionRepository
) -> None:
    callback = _callback(users, sessions)

    assert isinstance(callback.execute("g1", "alice"), Err)

    user = users.save(make_user("alice"))
    linked = callback.execute("g1", "alice").unwrap()
    assert linked.user.github_id == "g1"

    conflict = callback.execute("g2", "alice")
    assert isinstance(conflict, Err)
    assert conflict.error.message == "Account is already linked to a different GitHub account."

    again = callback.execute("g1", "alice").unwrap()
    assert again.user.id == user.id
    assert again.user.github_id == "g1"
    assert users.count() == 1
    assert len(sessions.sessions) == 2
