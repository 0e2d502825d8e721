import pytest

from gitolite_admin import model, parser


def test_parse_empty():
    assert parser.parse("") == model.Document()


def test_parse_blank_lines():
    assert parser.parse("\n   \n\t\n") == model.Document()


def test_parse_comment():
    got = parser.parse("#   hello    world  \n")
    assert got.entries == [model.Comment(text="hello world")]


def test_parse_group():
    got = parser.parse("@devs = alice  bob\n")
    assert got.entries == [model.Group(name="@devs", members=["alice", "bob"])]


def test_parse_group_no_spaces():
    got = parser.parse("@devs=alice\n")
    assert got.entries == [model.Group(name="@devs", members=["alice"])]


def test_parse_group_comment():
    got = parser.parse("@devs = alice bob # the developers\n")
    assert got.entries == [model.Group(name="@devs", members=["alice", "bob"], comment="the developers")]


def test_parse_group_empty_comment():
    got = parser.parse("@devs = alice #\n")
    assert got.entries == [model.Group(name="@devs", members=["alice"])]


def test_parse_group_missing_equals():
    with pytest.raises(parser.ConfigSyntaxError, match="expected key/value pair") as e:
        parser.parse("# header\n@devs alice\n")
    assert e.value.lineno == 2
    assert e.value.line == "@devs alice"


def test_parse_group_two_equals():
    with pytest.raises(parser.ConfigSyntaxError, match="expected key/value pair"):
        parser.parse("@devs = alice = bob\n")


def test_parse_repo():
    got = parser.parse("repo foo\n")
    assert got.entries == [model.Repo(aliases=["foo"])]


def test_parse_repo_aliases_comment():
    got = parser.parse("repo foo bar/.* # some repos\n")
    assert got.entries == [model.Repo(aliases=["foo", "bar/.*"], comment="some repos")]


def test_parse_repo_no_name():
    with pytest.raises(parser.ConfigSyntaxError, match="expected repository name"):
        parser.parse("repo # nothing\n")


def test_parse_access():
    got = parser.parse("repo foo\n\tRW+ = alice\n")
    (repo,) = got.entries
    assert repo.body == [model.Access(perm="RW+", name="alice")]


def test_parse_access_ref_comment():
    got = parser.parse("repo foo\n    RW   master   =   @devs   # devs push master\n")
    (repo,) = got.entries
    assert repo.body == [model.Access(perm="RW", ref="master", name="@devs", comment="devs push master")]


def test_parse_access_deny():
    got = parser.parse("repo foo\n\t- refs/tags/ = bob\n")
    (repo,) = got.entries
    assert repo.body == [model.Access(perm="-", ref="refs/tags/", name="bob")]


def test_parse_access_several_refs():
    got = parser.parse("repo foo\n\tRW master dev = bob\n")
    (repo,) = got.entries
    assert repo.body == [model.Access(perm="RW", ref="master dev", name="bob")]


def test_parse_access_missing_name():
    with pytest.raises(parser.ConfigSyntaxError, match="expected user or group name"):
        parser.parse("repo foo\n\tRW =\n")


def test_parse_access_missing_perm():
    with pytest.raises(parser.ConfigSyntaxError, match="expected permission"):
        parser.parse("repo foo\n\t= alice\n")


def test_parse_option_config():
    got = parser.parse(
        """\
repo foo
    option deny-rules = 1 # strict
    config gitweb.owner = Alice Smith
"""
    )
    (repo,) = got.entries
    assert repo.body == [
        model.Option(name="deny-rules", value="1", comment="strict"),
        model.Config(name="gitweb.owner", value="Alice Smith"),
    ]


def test_parse_body_outside_repo():
    with pytest.raises(parser.ConfigSyntaxError, match="expected to be inside a repo block") as e:
        parser.parse("@devs = alice\n\nRW+ = alice\n")
    assert e.value.lineno == 3
    assert str(e.value) == "Syntax error: line 3: expected to be inside a repo block: 'RW+ = alice'"


def test_parse_body_missing_equals():
    with pytest.raises(parser.ConfigSyntaxError, match="expected key/value pair") as e:
        parser.parse("repo foo\n\tRW+ alice\n")
    assert e.value.lineno == 2


def test_parse_escaped_hash():
    got = parser.parse("repo foo\n\tconfig hooks.tag = a\\#b # real comment\n")
    (repo,) = got.entries
    assert repo.body == [model.Config(name="hooks.tag", value="a\\#b", comment="real comment")]


def test_parse_comment_in_repo_body():
    got = parser.parse(
        """\
repo foo
    # alice owns it
    RW+ = alice
"""
    )
    assert got.entries == [
        model.Repo(
            aliases=["foo"],
            body=[
                model.Comment(text="alice owns it"),
                model.Access(perm="RW+", name="alice"),
            ],
        ),
    ]


def test_parse_comment_before_next_repo():
    got = parser.parse(
        """\
# header
repo foo
    RW+ = alice

# about bar
repo bar
    R = bob
"""
    )
    assert got.entries == [
        model.Comment(text="header"),
        model.Repo(aliases=["foo"], body=[model.Access(perm="RW+", name="alice")]),
        model.Comment(text="about bar"),
        model.Repo(aliases=["bar"], body=[model.Access(perm="R", name="bob")]),
    ]


def test_parse_comment_before_group_after_repo():
    got = parser.parse(
        """\
repo foo
    RW+ = alice
# more people
@devs = bob
"""
    )
    assert got.entries == [
        model.Repo(aliases=["foo"], body=[model.Access(perm="RW+", name="alice")]),
        model.Comment(text="more people"),
        model.Group(name="@devs", members=["bob"]),
    ]


def test_parse_trailing_comment():
    got = parser.parse("repo foo\n    RW+ = alice\n# the end\n")
    assert got.entries[-1] == model.Comment(text="the end")


def test_parse_keeps_order():
    got = parser.parse(
        """\
@a = x
repo foo
    R = x
@b = y
repo bar
    R = y
"""
    )
    assert [type(e).__name__ for e in got.entries] == ["Group", "Repo", "Group", "Repo"]
