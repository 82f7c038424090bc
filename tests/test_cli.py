"""End-to-end CLI runs over the fixture package tree."""
import shutil

import pytest
from typer.testing import CliRunner

from deprecation_audit.main import app


runner = CliRunner()

EXPECTED_REPORT = """\
# ember-object.mixin

## `@ember/object/lib/mixin.ts:6`

https://github.com/emberjs/ember.js/blob/lts-3-28/packages/%40ember%2Fobject%2Flib%2Fmixin.ts#L6

```ts
deprecate('Mixins are deprecated', false, {
  id: 'ember-object.mixin',
  until: '4.0.0'
})
```

## `@ember/routing/lib/router.ts:23`

https://github.com/emberjs/ember.js/blob/lts-3-28/packages/%40ember%2Frouting%2Flib%2Frouter.ts#L23

```ts
deprecate('Mixin applied late', false, {
  id: 'ember-object.mixin',
  until: '5.0.0'
})
```

# routing.transition-methods

## `@ember/routing/lib/router.ts:8`

https://github.com/emberjs/ember.js/blob/lts-3-28/packages/%40ember%2Frouting%2Flib%2Frouter.ts#L8

```ts
deprecate(`Legacy transition to ${name}`, false, {
  id: 'routing.transition-methods',
  until: '4.0.0'
})
```

"""


@pytest.fixture(autouse=True)
def default_links(monkeypatch):
    for name in ('HOST', 'ORG', 'REPO', 'REF', 'BASE_DIR'):
        monkeypatch.delenv(f'DEPRECATION_AUDIT_LINK_{name}', raising=False)
    monkeypatch.delenv('DEPRECATION_AUDIT_SENTINEL', raising=False)
    monkeypatch.delenv('DEPRECATION_AUDIT_FUNCTION', raising=False)


def test_scan_writes_report(fixtures_dir, tmp_path):
    output = tmp_path / 'report.md'
    result = runner.invoke(app, ['scan', str(fixtures_dir), '--output', str(output), '--no-progress'])

    assert result.exit_code == 0, result.output
    assert output.read_text(encoding='utf-8') == EXPECTED_REPORT
    assert 'Debug-only calls' in result.output


def test_scan_is_idempotent(fixtures_dir, tmp_path):
    first = tmp_path / 'first.md'
    second = tmp_path / 'second.md'

    runner.invoke(app, ['scan', str(fixtures_dir), '-o', str(first), '--no-progress'])
    runner.invoke(app, ['scan', str(fixtures_dir), '-o', str(second)])

    assert first.read_bytes() == second.read_bytes()


def test_scan_aborts_on_parse_failure(fixtures_dir, tmp_path):
    source_root = tmp_path / 'packages'
    shutil.copytree(fixtures_dir, source_root)
    (source_root / 'aaa-broken.ts').write_text("if (DEBUG) {\n  deprecate('x',\n", encoding='utf-8')
    output = tmp_path / 'report.md'

    result = runner.invoke(app, ['scan', str(source_root), '-o', str(output), '--no-progress'])

    assert result.exit_code == 1
    assert 'aaa-broken.ts' in result.output
    assert 'ParseFailure' in result.output
    assert not output.exists()


def test_scan_missing_root(tmp_path):
    result = runner.invoke(app, ['scan', str(tmp_path / 'nope'), '--no-progress'])
    assert result.exit_code == 1


def test_scan_custom_sentinel(fixtures_dir, tmp_path):
    output = tmp_path / 'report.md'
    result = runner.invoke(app, ['scan', str(fixtures_dir), '-o', str(output), '--sentinel', 'PRODUCTION', '--no-progress'])

    assert result.exit_code == 0, result.output
    assert output.read_text(encoding='utf-8') == ''


def test_check_lists_entries(fixtures_dir):
    path = fixtures_dir / '@ember' / 'object' / 'lib' / 'mixin.ts'
    result = runner.invoke(app, ['check', str(path), '--root', str(fixtures_dir)])

    assert result.exit_code == 0, result.output
    assert 'ember-object.mixin' in result.output
    assert 'ember-object.runtime' in result.output


def test_check_reports_failure(tmp_path):
    broken = tmp_path / 'broken.ts'
    broken.write_text("deprecate(", encoding='utf-8')

    result = runner.invoke(app, ['check', str(broken)])

    assert result.exit_code == 1
    assert 'broken.ts' in result.output


def test_scan_reports_path_of_unexpected_error(fixtures_dir, tmp_path, monkeypatch):
    def explode(call, filename, debug):
        raise RuntimeError('snippet failed')

    monkeypatch.setattr('deprecation_audit.analyzer.scanner.build_entry', explode)
    output = tmp_path / 'report.md'

    result = runner.invoke(app, ['scan', str(fixtures_dir), '-o', str(output), '--no-progress'])

    assert result.exit_code == 1
    assert 'mixin.ts' in result.output
    assert 'RuntimeError: snippet failed' in result.output
    assert not output.exists()


def test_check_reports_unexpected_error(fixtures_dir, monkeypatch):
    def explode(call, filename, debug):
        raise RuntimeError('snippet failed')

    monkeypatch.setattr('deprecation_audit.analyzer.scanner.build_entry', explode)
    path = fixtures_dir / '@ember' / 'object' / 'lib' / 'mixin.ts'

    result = runner.invoke(app, ['check', str(path)])

    assert result.exit_code == 1
    assert 'mixin.ts' in result.output
    assert 'RuntimeError' in result.output


def test_scan_long_expression(tmp_path):
    source_root = tmp_path / 'packages'
    source_root.mkdir()
    message = ' + '.join(["'a'"] * 3000)
    (source_root / 'long.ts').write_text(
        f"if (DEBUG) {{\n  deprecate({message}, false, {{ id: 'long' }});\n}}\n",
        encoding='utf-8',
    )
    output = tmp_path / 'report.md'

    result = runner.invoke(app, ['scan', str(source_root), '-o', str(output), '--no-progress'])

    assert result.exit_code == 0, result.output
    assert output.read_text(encoding='utf-8').startswith('# long\n')
