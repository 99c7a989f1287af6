"""
Configuration parser module
Configuration files are specified in INI format, with different "sections" corresponding
to particular configuration numbers.
"""

import os
import configparser
from mhboost.utility.errors import ConfigurationError

FILE_OPTIONS = ('training_file', 'labels_file', 'test_file',
                'input_model_file', 'output_model_file', 'output_file')

DEFAULTS = {'iterations': 1000,
            'tolerance': 1e-10,
            'weak_learner': 'decision_stump',
            'seed': None,
            'working_dir': './'}


def get_configuration(conf_num, conf_path = "./configurations.cfg"):
    """
    Parse the different fields of the configuration file, and
    store them in a dictionary.
    File paths are resolved against the working directory. Options missing
    from the section are None, or their default value if they have one.
    """
    config = configparser.ConfigParser(allow_no_value = True)
    if not config.read(conf_path):
        raise ConfigurationError("Error : Cannot read configuration file %s."
                                 % conf_path)
    section = "Configuration " + str(conf_num)
    if not config.has_section(section):
        raise ConfigurationError("Error : There is not any configuration with "
                                 "the specified number %s. Please choose "
                                 "another number." % conf_num)

    my_dict = dict.fromkeys(FILE_OPTIONS)
    my_dict.update(DEFAULTS)
    for option in config.options(section):
        value = config.get(section, option)
        if value is not None:
            value = value.strip()
        if value == '':
            value = None
        if option in my_dict and value is not None:
            my_dict[option] = value

    # Convert strings to numbers for numerical fields
    try:
        my_dict['iterations'] = int(my_dict['iterations'])
    except ValueError:
        raise ConfigurationError("Error : Configuration field ``iterations`` "
                                 "must be an integer.")
    if my_dict['iterations'] < 0:
        raise ConfigurationError("Error : Configuration field ``iterations`` "
                                 "must be non-negative.")

    try:
        my_dict['tolerance'] = float(my_dict['tolerance'])
    except ValueError:
        raise ConfigurationError("Error : Configuration field ``tolerance`` "
                                 "must be a floating point number.")

    if my_dict['seed'] is not None:
        try:
            my_dict['seed'] = int(my_dict['seed'])
        except ValueError:
            raise ConfigurationError("Error : Configuration field ``seed`` "
                                     "must be an integer.")

    wd = os.path.realpath(os.path.expanduser(my_dict['working_dir']))
    my_dict['working_dir'] = wd
    for option in FILE_OPTIONS:
        if my_dict[option] is not None:
            my_dict[option] = os.path.join(wd,
                                           os.path.expanduser(my_dict[option]))
    return my_dict
