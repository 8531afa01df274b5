import pytest
import git

from fancygit.exceptions import PromptCancelled
from fancygit.tui import Prompter

CANCEL = object()


class ScriptedPrompter(Prompter):
    """
    Answers questions from a fixed script. Answers rejected by a question's
    validator are recorded and the next scripted answer is tried, mimicking
    the re-ask behaviour of the real prompt.
    """

    def __init__(self, answers):
        self.answers = list(answers)
        self.questions = []
        self.rejected = []

    def ask(self, question):
        self.questions.append(question)
        while True:
            if not self.answers:
                raise AssertionError(f"Unexpected question: {question.message}")
            answer = self.answers.pop(0)
            if answer is CANCEL:
                raise PromptCancelled(question.message)
            if question.kind == "select":
                values = [c.value for c in question.choices]
                assert answer in values, f"{answer!r} not offered in {values}"
            if question.validate_answer is not None:
                verdict = question.validate_answer(answer)
                if verdict is not True:
                    self.rejected.append((question.message, verdict))
                    continue
            return answer

    @property
    def messages(self):
        return [q.message for q in self.questions]


@pytest.fixture
def scripted():
    """Factory for a ScriptedPrompter."""
    return ScriptedPrompter


@pytest.fixture(autouse=True)
def isolated_user_config(tmp_path, monkeypatch):
    """Keeps the global formats file out of the real user config directory."""
    user_dir = tmp_path / "user_config"
    monkeypatch.setattr("fancygit.stores.USER_CONFIG_DIR", user_dir)
    return user_dir


@pytest.fixture
def temp_git_repo(tmp_path):
    """
    Creates a temporary git repo with one commit.
    returns the path to the repo.
    """
    repo_dir = tmp_path / "test_repo"
    repo_dir.mkdir()

    repo = git.Repo.init(repo_dir)

    # Configure author (required for commits)
    repo.config_writer().set_value("user", "name", "Test Bot").release()
    repo.config_writer().set_value("user", "email", "test@bot.com").release()

    # Create a file and commit it (History)
    file_path = repo_dir / "hello.py"
    file_path.write_text("print('Hello World')")
    repo.index.add([str(file_path)])
    repo.index.commit("Initial commit")
    repo.close()

    return repo_dir


@pytest.fixture
def repo_with_remote(temp_git_repo, tmp_path):
    """temp_git_repo with a bare 'origin' that already holds the initial commit."""
    bare = git.Repo.init(tmp_path / "remote.git", bare=True)
    repo = git.Repo(temp_git_repo)
    repo.create_remote("origin", str(tmp_path / "remote.git"))
    repo.git.push("origin", repo.active_branch.name)
    repo.close()
    bare.close()
    return temp_git_repo


@pytest.fixture
def cancel():
    """Scripted answer that simulates Ctrl-C inside a prompt."""
    return CANCEL
