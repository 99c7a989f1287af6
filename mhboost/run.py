import sys
import time
import argparse
import numpy as np
from datetime import datetime
from mhboost.environment import data as datafile
from mhboost.environment.model import AdaBoostModel, get_weak_learner_type
from mhboost.utility import parser
from mhboost.utility.errors import ConfigurationError, MHBoostError

DESCRIPTION = ("Trains an AdaBoost.MH model with decision stump or perceptron "
               "weak learners, or loads one, and applies it to a test set. "
               "Rounds run until the weighted training error changes less "
               "than the tolerance or the iteration limit is reached.")

"""Options that also exist in configuration files"""
CONF_OPTIONS = parser.FILE_OPTIONS + ('iterations', 'tolerance',
                                      'weak_learner', 'seed')


def create_parser():
    argparser = argparse.ArgumentParser(prog = 'mhboost',
                                        description = DESCRIPTION)
    argparser.add_argument('--training_file', '-t',
                           type = str,
                           help = 'A file containing the training set')
    argparser.add_argument('--labels_file', '-l',
                           type = str,
                           help = 'A file containing labels for the training '
                                  'set, the last dimension of the training '
                                  'set is used if not given')
    argparser.add_argument('--input_model_file', '-m',
                           type = str,
                           help = 'File containing input AdaBoost model')
    argparser.add_argument('--output_model_file', '-M',
                           type = str,
                           help = 'File to save trained AdaBoost model to '
                                  '(.h5, .hdf5 or .json)')
    argparser.add_argument('--test_file', '-T',
                           type = str,
                           help = 'A file containing the test set')
    argparser.add_argument('--output_file', '-o',
                           type = str,
                           help = 'The file in which the predicted labels for '
                                  'the test set will be written')
    argparser.add_argument('--iterations', '-i',
                           type = int,
                           help = 'The maximum number of boosting iterations '
                                  'to be run, 0 will run until convergence '
                                  '(default 1000)')
    argparser.add_argument('--tolerance', '-e',
                           type = float,
                           help = 'The tolerance for change in values of the '
                                  'weighted error during training '
                                  '(default 1e-10)')
    argparser.add_argument('--weak_learner', '-w',
                           type = str,
                           help = "The type of weak learner to use: "
                                  "'decision_stump' or 'perceptron' "
                                  "(default decision_stump)")
    argparser.add_argument('--seed', '-s',
                           type = int,
                           help = 'Random seed for training')
    argparser.add_argument('--conf_path', '-cp',
                           type = str,
                           help = 'Path to a configuration file')
    argparser.add_argument('--conf_num', '-cn',
                           type = int,
                           default = 1,
                           help = 'Configuration number to read from the '
                                  'configuration file (default 1)')
    argparser.add_argument('--verbose', '-v',
                           action = 'store_true',
                           help = 'Log every boosting round')
    return argparser


def warn(msg):
    print(datetime.now(), "Warning : " + msg)


def get_options(args):
    """
    Merge command line arguments over the configuration file, if any.
    Returns the options and the set of options that were given explicitly.
    """
    options = dict.fromkeys(CONF_OPTIONS)
    if args.conf_path is not None:
        conf_dict = parser.get_configuration(conf_num = args.conf_num,
                                             conf_path = args.conf_path)
        for option in CONF_OPTIONS:
            options[option] = conf_dict[option]
        given = set(o for o in parser.FILE_OPTIONS if conf_dict[o] is not None)
    else:
        given = set()
    for option in CONF_OPTIONS:
        value = getattr(args, option)
        if value is not None:
            options[option] = value
            given.add(option)
    for option, value in parser.DEFAULTS.items():
        if option in options and options[option] is None:
            options[option] = value
    return options, given


def check_options(options, given):
    """
    Raise ConfigurationError for fatal combinations, warn about ignored ones
    """
    if 'training_file' in given and 'input_model_file' in given:
        raise ConfigurationError("Only one of --training_file or "
                                 "--input_model_file may be specified!")
    if 'training_file' not in given and 'input_model_file' not in given:
        raise ConfigurationError("Either --training_file or "
                                 "--input_model_file must be specified!")
    get_weak_learner_type(options['weak_learner'])
    if options['iterations'] < 0:
        raise ConfigurationError("Invalid number of iterations (%i) "
                                 "specified! Must be greater than or equal "
                                 "to 0." % options['iterations'])

    if 'labels_file' in given and 'training_file' not in given:
        warn("--labels_file ignored, because --training_file was not passed.")
    if 'input_model_file' in given:
        for option in ('weak_learner', 'tolerance', 'iterations', 'seed'):
            if option in given:
                warn("--%s ignored because --input_model_file is "
                     "specified." % option)
    if 'output_model_file' not in given and 'output_file' not in given:
        warn("Neither --output_model_file nor --output_file are specified; "
             "no results will be saved.")
    if 'output_file' in given and 'test_file' not in given:
        warn("--output_file ignored because --test_file is not specified.")


def run(options, given, logEN = False):
    if 'training_file' in given:
        data, labels = datafile.load_training(options['training_file'],
                                              labels_fp = options['labels_file'],
                                              logEN = logEN)
        model = AdaBoostModel(
                    weak_learner_type = get_weak_learner_type(options['weak_learner']),
                    logEN = logEN)
        rng = np.random.RandomState(options['seed'])
        tstart = time.time()
        model.fit(data,
                  labels,
                  iterations = options['iterations'],
                  tolerance = options['tolerance'],
                  rng = rng)
        if logEN:
            msg = "Info : Trained %i weak learners in %0.2f seconds." % (
                  len(model.boost), time.time() - tstart)
            print(datetime.now(), msg)
    else:
        model = AdaBoostModel.load(options['input_model_file'])
        if logEN:
            msg = "Info : Loaded %s model with %i weak learners." % (
                  model.weak_learner_name, len(model.boost))
            print(datetime.now(), msg)

    if 'test_file' in given:
        test_data = datafile.load_data(options['test_file'])
        tstart = time.time()
        predictions = model.predict(test_data)
        if logEN:
            msg = "Info : Classified %i points in %0.2f seconds." % (
                  test_data.shape[1], time.time() - tstart)
            print(datetime.now(), msg)
        if 'output_file' in given:
            datafile.save_labels(options['output_file'], predictions)

    if 'output_model_file' in given:
        model.save(options['output_model_file'])
    return model


def main(argv = None):
    args = create_parser().parse_args(argv)
    try:
        options, given = get_options(args)
        check_options(options, given)
        run(options, given, logEN = args.verbose)
    except MHBoostError as e:
        print(datetime.now(), "Fatal : %s" % e, file = sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
