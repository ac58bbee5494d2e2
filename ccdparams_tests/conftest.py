import os

from ccdparams.conf import CONFIG_YAML_ENV_VAR, UNITTESTS_SETTINGS_FILEPATH

os.environ[CONFIG_YAML_ENV_VAR] = os.environ.get('CCDPARAMS_TEST_CONFIG_YAML', UNITTESTS_SETTINGS_FILEPATH)
