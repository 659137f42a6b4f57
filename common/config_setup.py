"""This file contains Config_settings class. It establishes the settings used when converting
the EV target scenario inputs. It takes these settings from the run_config.toml file and lets
command line arguments override the input and output directories."""

###################################################################################################
# Setup

# Import packages
import tomllib
from pathlib import Path
import types
import argparse

# Import python modules
from definitions import PROJECT_ROOT
from policy.transport import DEFAULT_POLICY_YEARS


class ConfigError(ValueError):
    """Configuration error raised when run_config.toml holds invalid settings."""


def _section(config, name):
    """Return table ``name`` from ``config``, or an empty mapping if absent."""
    section = config.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f'[{name}] must be a table in run_config.toml')
    return section


def _string(section, key, default):
    value = section.get(key, default)
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f'{key} must be a non-empty string, got {value!r}')
    return value


def _number(section, key, default):
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f'{key} must be numeric, got {value!r}')
    return float(value)


def _resolve_dir(value):
    path = Path(value)
    if not path.is_absolute():
        path = Path(PROJECT_ROOT, path)
    return path


###################################################################################################
# Configuration Class


class Config_settings:
    """Generates the converter settings. Settings include:  \n
    - Input/Output directories and file names \n
    - Conversion constants \n
    - Policy portfolio standard settings
    """

    def __init__(self, config_path: Path, args: argparse.Namespace | None = None):
        """Creates configuration object upon instantiation

        Parameters
        ----------
        config_path : Path
            Path to run_config.toml
        args : Namespace
            Parsed command line options (input_dir, output_dir, debug) or other parsed object

        Raises
        ------
        ConfigError
            run_config.toml is missing, malformed or holds values of the wrong type
        """
        # __INIT__: Grab arguments namespace
        self.args = args
        if not args:
            self.args = types.SimpleNamespace()
        for name, default in (('input_dir', None), ('output_dir', None), ('debug', False)):
            if not hasattr(self.args, name):
                setattr(self.args, name, default)
        self.PROJECT_ROOT = PROJECT_ROOT
        self.config_path = Path(config_path)

        # __INIT__: Dump toml
        try:
            with open(self.config_path, 'rb') as src:
                config = tomllib.load(src)
        except FileNotFoundError as exc:
            raise ConfigError(f'configuration file not found: {self.config_path}') from exc
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f'unable to parse {self.config_path}: {exc}') from exc
        self.raw = config

        ############################################################################################
        # __INIT__: Paths, command line arguments win over the config file
        paths = _section(config, 'paths')
        input_dir = self.args.input_dir or _string(paths, 'input_dir', 'input')
        output_dir = self.args.output_dir or _string(paths, 'output_dir', 'output')
        self.INPUT_ROOT = _resolve_dir(input_dir)
        self.OUTPUT_ROOT = _resolve_dir(output_dir)

        # __INIT__: Input and output file names
        inputs = _section(config, 'inputs')
        self.target_file = _string(inputs, 'targets', 'EVTarget.csv')
        self.assumptions_file = _string(
            inputs, 'assumptions', 'Assumptions on annual travel per vehicle and load factor.csv'
        )

        outputs = _section(config, 'outputs')
        self.coef_file = _string(outputs, 'coefficients', 'StubTranTechCoef.csv')
        self.res_file = _string(outputs, 'resources', 'StubTranTechRES.csv')
        self.xml_file = _string(outputs, 'document', 'new_RPS_BEV2.xml')
        na_rep = outputs.get('csv_na_rep', 'NA')
        if not isinstance(na_rep, str):
            raise ConfigError(f'csv_na_rep must be a string, got {na_rep!r}')
        self.csv_na_rep = na_rep

        ############################################################################################
        # __INIT__: Conversion Configs
        conversion = _section(config, 'conversion')
        self.bev_technology = _string(conversion, 'bev_technology', 'BEV')
        self.coefficient_scale = _number(conversion, 'coefficient_scale', 1_000_000.0)
        self.p_multiplier = _number(conversion, 'p_multiplier', 1_000_000_000.0)
        allow_non_finite = conversion.get('allow_non_finite', False)
        if not isinstance(allow_non_finite, bool):
            raise ConfigError(f'allow_non_finite must be true or false, got {allow_non_finite!r}')
        self.allow_non_finite = allow_non_finite

        ############################################################################################
        # __INIT__: Policy Configs
        policy = _section(config, 'policy')
        self.policy_type = _string(policy, 'policy_type', 'RES')
        years = policy.get('years', list(DEFAULT_POLICY_YEARS))
        if isinstance(years, (str, bytes)) or not isinstance(years, list):
            raise ConfigError('policy years must be a list of integers')
        try:
            self.policy_years = [int(year) for year in years]
        except (TypeError, ValueError) as exc:
            raise ConfigError(f'policy years must be integers, got {years!r}') from exc

    @property
    def target_path(self) -> Path:
        return Path(self.INPUT_ROOT, self.target_file)

    @property
    def assumptions_path(self) -> Path:
        return Path(self.INPUT_ROOT, self.assumptions_file)

    def conversion_options(self) -> dict:
        """Return the keyword options consumed by :func:`engine.pipeline.run_conversion`."""
        return {
            'bev_technology': self.bev_technology,
            'coefficient_scale': self.coefficient_scale,
            'p_multiplier': self.p_multiplier,
            'allow_non_finite': self.allow_non_finite,
            'policy_years': list(self.policy_years),
            'policy_type': self.policy_type,
        }
