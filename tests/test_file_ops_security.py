from __future__ import annotations

import os

import pytest

from protondrive_mcp.errors import AccessDenied, NotFound
from protondrive_mcp.services import file_ops
from protondrive_mcp.services.file_ops import FileOps


def test_validate_path_blocks_traversal(tmp_path):
    with pytest.raises(AccessDenied):
        file_ops.validate_path('../../etc/passwd', tmp_path)


def test_validate_path_blocks_traversal_with_backslashes(tmp_path):
    with pytest.raises(AccessDenied):
        file_ops.validate_path('docs\\..\\..\\secret.txt', tmp_path)


def test_validate_path_blocks_sibling_with_shared_prefix(tmp_path):
    root = tmp_path / 'drive'
    root.mkdir()
    (tmp_path / 'drive-evil').mkdir()

    with pytest.raises(AccessDenied):
        file_ops.validate_path('../drive-evil/x.txt', root)


def test_validate_path_empty_maps_to_root(tmp_path):
    assert file_ops.validate_path('', tmp_path) == tmp_path
    assert file_ops.validate_path(None, tmp_path) == tmp_path
    assert file_ops.validate_path('///', tmp_path) == tmp_path


def test_validate_path_treats_absolute_input_as_relative(tmp_path):
    result = file_ops.validate_path('/etc/passwd', tmp_path)

    assert result == tmp_path / 'etc' / 'passwd'


def test_validate_path_normalizes_mixed_separators(tmp_path):
    result = file_ops.validate_path('Projects//2024\\notes/./a.txt', tmp_path)

    assert str(result).startswith(str(tmp_path))
    assert str(result).endswith(os.sep.join(['Projects', '2024', 'notes', 'a.txt']))


def test_validate_path_allows_dotdot_that_stays_inside(tmp_path):
    result = file_ops.validate_path('a/b/../c.txt', tmp_path)

    assert result == tmp_path / 'a' / 'c.txt'


def test_validate_path_dotdot_back_to_root_is_allowed(tmp_path):
    assert file_ops.validate_path('a/..', tmp_path) == tmp_path


def test_list_dir_denies_before_touching_filesystem(tmp_path, monkeypatch):
    calls = []

    def _scandir(path):
        calls.append(path)
        raise AssertionError('scandir should not run')

    monkeypatch.setattr(file_ops.os, 'scandir', _scandir)
    ops = FileOps(tmp_path)

    with pytest.raises(AccessDenied):
        ops.list_dir('../../etc')

    assert calls == []


def test_write_denied_outside_root_creates_nothing(tmp_path):
    root = tmp_path / 'drive'
    root.mkdir()
    ops = FileOps(root)

    with pytest.raises(AccessDenied):
        ops.write_text('../escaped/file.txt', 'nope')

    assert not (tmp_path / 'escaped').exists()


def test_delete_refuses_root(tmp_path):
    (tmp_path / 'keep.txt').write_text('x')
    ops = FileOps(tmp_path)

    with pytest.raises(AccessDenied):
        ops.delete('')

    assert (tmp_path / 'keep.txt').exists()


def test_roots_are_isolated_per_instance(tmp_path):
    first = tmp_path / 'one'
    second = tmp_path / 'two'
    first.mkdir()
    second.mkdir()

    assert FileOps(first).safe_path('a.txt') == first / 'a.txt'
    assert FileOps(second).safe_path('a.txt') == second / 'a.txt'
    with pytest.raises(AccessDenied):
        FileOps(first).safe_path('../two/a.txt')


def test_write_refuses_root(tmp_path):
    ops = FileOps(tmp_path)

    with pytest.raises(AccessDenied):
        ops.write_text('', 'x')
    with pytest.raises(AccessDenied):
        ops.write_text('a/..', 'x')

    assert list(tmp_path.iterdir()) == []


def test_write_to_missing_root_creates_nothing_outside(tmp_path):
    root = tmp_path / 'outside' / 'drive'
    ops = FileOps(root)

    with pytest.raises(AccessDenied):
        ops.write_text('', 'x')
    with pytest.raises(NotFound):
        ops.write_text('notes/a.txt', 'x')

    assert not (tmp_path / 'outside').exists()


def test_create_folder_in_missing_root_creates_nothing_outside(tmp_path):
    root = tmp_path / 'outside' / 'drive'

    with pytest.raises(NotFound):
        FileOps(root).mkdir('Projects')

    assert not (tmp_path / 'outside').exists()


def test_create_folder_on_existing_root_is_a_no_op(tmp_path):
    assert FileOps(tmp_path).mkdir('') == tmp_path


def test_list_dir_does_not_follow_folder_symlinks(tmp_path):
    (tmp_path / 'real').mkdir()
    (tmp_path / 'link').symlink_to(tmp_path / 'real', target_is_directory=True)

    items = {i['name']: i['type'] for i in FileOps(tmp_path).list_dir('')}

    assert items == {'real': 'folder', 'link': 'file'}
