"""
Tests for the default driver: static lookup and front controller candidates.
"""
from drivers.base import BasicDriver, Decision, DecisionKind, ProjectRoot


def write(path, content=''):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


class TestStaticFiles:

    def test_public_checked_first(self, tmp_path):
        public_css = write(tmp_path / 'public' / 'app.css', 'a')
        write(tmp_path / 'app.css', 'b')

        assert BasicDriver().is_static_file(str(tmp_path), 'x', '/app.css') == str(public_css)

    def test_root_file(self, tmp_path):
        css = write(tmp_path / 'css' / 'app.css', 'a')

        assert BasicDriver().is_static_file(str(tmp_path), 'x', '/css/app.css') == str(css)

    def test_directories_are_not_static(self, tmp_path):
        (tmp_path / 'css').mkdir()

        assert BasicDriver().is_static_file(str(tmp_path), 'x', '/css') is None

    def test_php_is_never_static(self, tmp_path):
        write(tmp_path / 'info.php', '<?php phpinfo();')

        assert BasicDriver().is_static_file(str(tmp_path), 'x', '/info.php') is None


class TestFrontController:

    def test_requested_script(self, tmp_path):
        script = write(tmp_path / 'wp-login.php', '<?php\n')
        write(tmp_path / 'index.php', '<?php\n')

        front_controller = BasicDriver().front_controller_path(str(tmp_path), 'x', '/wp-login.php')

        assert front_controller.path == str(script)
        assert front_controller.environ['SCRIPT_NAME'] == '/wp-login.php'
        assert front_controller.environ['DOCUMENT_ROOT'] == str(tmp_path)

    def test_directory_index(self, tmp_path):
        index = write(tmp_path / 'wp-admin' / 'index.php', '<?php\n')
        write(tmp_path / 'index.php', '<?php\n')

        assert BasicDriver().front_controller_path(str(tmp_path), 'x', '/wp-admin/').path == str(index)

    def test_html_index(self, tmp_path):
        index = write(tmp_path / 'docs' / 'index.html', '<html></html>')

        assert BasicDriver().front_controller_path(str(tmp_path), 'x', '/docs/').path == str(index)

    def test_root_index_fallback(self, tmp_path):
        index = write(tmp_path / 'index.php', '<?php\n')

        front_controller = BasicDriver().front_controller_path(str(tmp_path), 'x', '/2021/05/hello/', host='blog.test:8080')

        assert front_controller.path == str(index)
        assert front_controller.environ['PHP_SELF'] == '/2021/05/hello/'
        assert front_controller.environ['SERVER_NAME'] == 'blog.test'
        assert front_controller.environ['SERVER_ADDR'] == '127.0.0.1'

    def test_public_index_fallback(self, tmp_path):
        index = write(tmp_path / 'public' / 'index.php', '<?php\n')

        front_controller = BasicDriver().front_controller_path(str(tmp_path), 'x', '/')

        assert front_controller.path == str(index)
        assert front_controller.document_root == str(tmp_path / 'public')
        assert front_controller.environ['SCRIPT_NAME'] == '/index.php'

    def test_nothing_found(self, tmp_path):
        assert BasicDriver().front_controller_path(str(tmp_path), 'x', '/') is None


class TestResolve:

    def test_serves_any_directory(self, tmp_path):
        assert BasicDriver().serves(str(tmp_path), 'x', '/') is True
        assert BasicDriver().serves(str(tmp_path / 'missing'), 'x', '/') is False

    def test_static_then_front_controller(self, tmp_path):
        css = write(tmp_path / 'a.css', 'a')
        write(tmp_path / 'index.php', '<?php\n')

        assert BasicDriver().resolve(str(tmp_path), 'x', '/a.css') == Decision.serve_local(str(css))
        assert BasicDriver().resolve(str(tmp_path), 'x', '/b/').kind == DecisionKind.FRONT_CONTROLLER

    def test_not_found(self, tmp_path):
        assert BasicDriver().resolve(str(tmp_path), 'x', '/a.css') == Decision.not_found()

    def test_classify_then_resolve_site(self, tmp_path):
        css = write(tmp_path / 'a.css', 'a')
        driver = BasicDriver()

        site = driver.classify(str(tmp_path), 'x')

        assert site == ProjectRoot(site_path=str(tmp_path), site_name='x')
        assert driver.resolve_site(site, '/a.css') == Decision.serve_local(str(css))
        assert driver.classify(str(tmp_path / 'missing'), 'x') is None
