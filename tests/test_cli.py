import pytest

from aocdir import history
from aocdir.cli import main
from aocdir.client import Submission
from aocdir.outcomes import AnswerOutcome
from aocdir.utils import colored


input_url = "https://adventofcode.com/2022/day/7/input"
answer_url = "https://adventofcode.com/2022/day/7/answer"


@pytest.fixture
def in_day(day_dir, monkeypatch, test_token):
    monkeypatch.chdir(day_dir)
    return day_dir


@pytest.fixture
def argv(mocker):
    def set_argv(*args):
        mocker.patch("sys.argv", ["aocdir", *args])

    return set_argv


def test_no_command(argv, capsys):
    argv()
    with pytest.raises(SystemExit(2)):
        main()
    out, err = capsys.readouterr()
    assert "usage: aocdir" in err


def test_input(in_day, argv, pook, capsys):
    mock = pook.get(input_url, response_body="fake data\n")
    argv("input")
    main()
    assert mock.calls == 1
    assert (in_day / "input.txt").read_text() == "fake data\n"
    out, err = capsys.readouterr()
    assert out.startswith("saved 2022/07 input to ")


def test_input_already_fetched(in_day, argv, pook, capsys):
    (in_day / "input.txt").write_text("old data")
    argv("input")
    main()
    assert (in_day / "input.txt").read_text() == "old data"
    out, err = capsys.readouterr()
    assert "already has puzzle input, use --force to fetch it again" in out


def test_input_force(in_day, argv, pook):
    (in_day / "input.txt").write_text("old data")
    mock = pook.get(input_url, response_body="new data")
    argv("input", "--force")
    main()
    assert mock.calls == 1
    assert (in_day / "input.txt").read_text() == "new data"


def test_input_locked(in_day, argv, pook, mocked_sleep):
    mock = pook.get(input_url, reply=404, times=5)
    argv("input")
    with pytest.raises(SystemExit) as cm:
        main()
    assert cm.value.code == colored("error: 2022/07 not available yet", "red")
    assert mock.calls == 5
    assert not (in_day / "input.txt").exists()


def test_input_missing_session(day_dir, monkeypatch, argv, pook, capsys):
    monkeypatch.chdir(day_dir)
    argv("input")
    with pytest.raises(SystemExit) as cm:
        main()
    assert cm.value.code == colored("error: Missing session ID", "red")
    out, err = capsys.readouterr()
    assert "AoC session ID is needed to get your puzzle data!" in err


def test_input_from_year_root(year_root, monkeypatch, argv, test_token):
    monkeypatch.chdir(year_root)
    argv("input")
    with pytest.raises(SystemExit) as cm:
        main()
    assert cm.value.code == colored("error: Day directory not valid: advent-of-code-2022", "red")


def test_submit_answer(in_day, argv, pook, capsys):
    post = pook.post(
        answer_url,
        body="level=1&answer=1234",
        response_body="<article>That's the right answer. Yeah!!</article>",
    )
    argv("submit", "1234")
    main()
    assert post.calls == 1
    out, err = capsys.readouterr()
    assert colored("That's the right answer. Yeah!!", "green") in out
    assert history.solved_parts(in_day) == {1}


def test_submit_guesses_part_two(in_day, argv, pook):
    history.record(in_day, 1, "1234", Submission(AnswerOutcome.CORRECT, "That's the right answer"))
    post = pook.post(
        answer_url,
        body="level=2&answer=99",
        response_body="<article>That's the right answer</article>",
    )
    argv("submit", "99")
    main()
    assert post.calls == 1
    assert history.solved_parts(in_day) == {1, 2}


def test_submit_explicit_part(in_day, argv, pook):
    post = pook.post(
        answer_url,
        body="level=2&answer=99",
        response_body="<article><p>That's not the right answer.</p></article>",
    )
    argv("submit", "99", "--part", "2")
    main()
    assert post.calls == 1


def test_submit_will_not_repeat(in_day, argv, pook, capsys):
    history.record(in_day, 1, "1234", Submission(AnswerOutcome.INCORRECT, "That's not the right answer."))
    argv("submit", "1234")
    main()
    out, err = capsys.readouterr()
    assert "aocdir will not submit that answer again." in out
    assert colored("That's not the right answer.", "red") in out
    assert len(history.load(in_day)) == 1


def test_submit_computes_answer(in_day, argv, pook, mocker):
    (in_day / "input.txt").write_text("data")
    run = mocker.patch("aocdir.cli.run_part", return_value="42")
    post = pook.post(
        answer_url,
        body="level=1&answer=42",
        response_body="<article>That's the right answer</article>",
    )
    argv("submit")
    main()
    run.assert_called_once_with(mocker.ANY, 1, "data", timeout=60)
    assert run.call_args.args[0].name == "day-07"
    assert post.calls == 1


def test_submit_without_input(in_day, argv):
    argv("submit")
    with pytest.raises(SystemExit) as cm:
        main()
    assert "no puzzle input in " in cm.value.code


def test_submit_blank_answer(in_day, argv):
    argv("submit", "  ")
    with pytest.raises(SystemExit) as cm:
        main()
    assert cm.value.code == colored("error: cowardly refusing to submit non-answer: ''", "red")


def test_submit_unrecognised_response(in_day, argv, pook):
    pook.post(answer_url, response_body="<article>Something new</article>")
    argv("submit", "1234")
    with pytest.raises(SystemExit) as cm:
        main()
    assert cm.value.code == colored("error: unrecognised response: 'Something new'", "red")
    assert history.load(in_day) == []


def test_submit_rate_limited(in_day, argv, pook, capsys, mocked_sleep):
    html = "<article><p>You gave an answer too recently. You have 1m 5s left to wait.</p></article>"
    post = pook.post(answer_url, response_body=html, times=2)
    argv("submit", "1234")
    main()
    assert post.calls == 1
    mocked_sleep.assert_not_called()
    out, err = capsys.readouterr()
    assert "try again in 65s" in out


def test_submit_correct_reopens_browser(in_day, argv, pook, mocker):
    pook.post(answer_url, response_body="<article>That's the right answer</article>")
    browser_open = mocker.patch("aocdir.cli.webbrowser.open")
    argv("submit", "1234", "--reopen")
    main()
    browser_open.assert_called_once_with("https://adventofcode.com/2022/day/7#part2")


def test_day(year_root, monkeypatch, argv, capsys):
    monkeypatch.chdir(year_root)
    argv("day")
    main()
    assert (year_root / "day-01" / "part1.py").is_file()
    out, err = capsys.readouterr()
    assert out.startswith("created ")
    assert out.rstrip().endswith("day-01")


def test_day_not_in_a_year(tmp_path, monkeypatch, argv):
    monkeypatch.chdir(tmp_path)
    argv("day")
    with pytest.raises(SystemExit) as cm:
        main()
    assert "Year directory not valid" in cm.value.code


def test_day_uses_config_prefixes(tmp_path, monkeypatch, argv, aocdir_config_dir):
    (aocdir_config_dir / "config.json").write_text('{"day_prefix": "d", "year_prefix": "aoc"}')
    root = tmp_path / "aoc2019"
    (root / "d01").mkdir(parents=True)
    monkeypatch.chdir(root)
    argv("day")
    main()
    assert (root / "d02" / "part1.py").is_file()


def test_part(in_day, argv, capsys):
    (in_day / "part1.py").write_text('"""part 1"""\n')
    argv("part")
    main()
    assert (in_day / "part2.py").read_text() == '"""part 2"""\n'
    out, err = capsys.readouterr()
    assert out.rstrip().endswith("part2.py")


def test_part_twice(in_day, argv):
    (in_day / "part1.py").write_text("one")
    (in_day / "part2.py").write_text("two")
    argv("part")
    with pytest.raises(SystemExit) as cm:
        main()
    assert "already exists" in cm.value.code


def test_submit_corrupt_history(in_day, argv, pook):
    path = in_day / ".submissions.json"
    path.write_text("{oops")
    argv("submit", "1234")
    with pytest.raises(SystemExit) as cm:
        main()
    assert f"error: invalid submission history {path}: " in cm.value.code
    assert path.read_text() == "{oops"


def test_input_undecodable(in_day, argv, pook):
    pook.get(input_url, response_body=b"\xff\xfe data")
    argv("input")
    with pytest.raises(SystemExit) as cm:
        main()
    assert f"error: undecodable response at {input_url}: " in cm.value.code
    assert not (in_day / "input.txt").exists()
