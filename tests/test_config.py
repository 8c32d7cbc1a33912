"""
Tests for configuration selection.
"""
import pytest

from mentortests import config as settings


class TestDatabaseUrl:

    def test_legacy_postgres_scheme_is_rewritten(self):
        url = settings.database_url('postgres://u:p@db:5432/tests')

        assert url == 'postgresql://u:p@db:5432/tests'

    def test_other_urls_unchanged(self):
        assert settings.database_url('sqlite:///local.db') == 'sqlite:///local.db'

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv('DATABASE_URL', 'postgres://env/db')

        assert settings.database_url() == 'postgresql://env/db'


class TestGetConfig:

    @pytest.mark.parametrize('env, expected', [
        ('production', settings.ProductionConfig),
        ('Testing', settings.TestingConfig),
        ('unknown', settings.DevelopmentConfig),
    ])
    def test_selected_by_flask_env(self, monkeypatch, env, expected):
        monkeypatch.setenv('FLASK_ENV', env)

        assert settings.get_config() is expected

    def test_testing_app_uses_memory_database(self, app):
        assert app.config['SQLALCHEMY_DATABASE_URI'] == 'sqlite:///:memory:'
        assert app.config['SCORED_EVENT'] == 'testScored'
