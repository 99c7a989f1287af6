import numpy as np
import pytest

from mhboost import run
from mhboost.environment.model import AdaBoostModel, PERCEPTRON


@pytest.fixture
def files(tmp_path):
    """Training, labels and test files of the one dimensional example"""
    train = tmp_path / 'train.csv'
    labels = tmp_path / 'labels.csv'
    test = tmp_path / 'test.csv'
    np.savetxt(str(train), [[-1.0]] * 4 + [[1.0]] * 4, delimiter = ',')
    np.savetxt(str(labels), [5, 5, 5, 5, 7, 7, 7, 7], fmt = '%d')
    np.savetxt(str(test), [[-0.9], [0.9]], delimiter = ',')
    return tmp_path


def read_predictions(fp):
    return np.loadtxt(str(fp), dtype = int).tolist()


def test_train_and_classify(files):
    out = files / 'predictions.csv'
    model_fp = files / 'model.h5'
    code = run.main(['-t', str(files / 'train.csv'),
                     '-l', str(files / 'labels.csv'),
                     '-T', str(files / 'test.csv'),
                     '-o', str(out),
                     '-M', str(model_fp),
                     '-i', '10',
                     '-e', '1e-10'])
    assert code == 0
    assert read_predictions(out) == [5, 7]

    model = AdaBoostModel.load(str(model_fp))
    assert model.dimensionality == 1
    assert model.mappings.tolist() == [5, 7]


def test_classify_with_saved_model(files):
    model_fp = files / 'model.json'
    assert run.main(['-t', str(files / 'train.csv'),
                     '-l', str(files / 'labels.csv'),
                     '-M', str(model_fp)]) == 0

    out = files / 'predictions.txt'
    assert run.main(['-m', str(model_fp),
                     '-T', str(files / 'test.csv'),
                     '-o', str(out)]) == 0
    assert read_predictions(out) == [5, 7]


def test_labels_from_last_column(tmp_path):
    train = tmp_path / 'train.csv'
    out = tmp_path / 'out.csv'
    np.savetxt(str(train), [[-2.0, 0], [-1.0, 0], [1.0, 1], [2.0, 1]],
               delimiter = ',')
    np.savetxt(str(tmp_path / 'test.csv'), [[-3.0], [3.0]], delimiter = ',')
    assert run.main(['-t', str(train),
                     '-T', str(tmp_path / 'test.csv'),
                     '-o', str(out)]) == 0
    assert read_predictions(out) == [0, 1]


def test_configuration_file(files):
    conf = files / 'configurations.cfg'
    conf.write_text("[Configuration 2]\n"
                    "working_dir = %s\n"
                    "training_file = train.csv\n"
                    "labels_file = labels.csv\n"
                    "test_file = test.csv\n"
                    "output_file = from_conf.csv\n"
                    "iterations = 5\n" % str(files))
    assert run.main(['-cp', str(conf), '-cn', '2']) == 0
    assert read_predictions(files / 'from_conf.csv') == [5, 7]


@pytest.mark.parametrize('argv', [
    ['-t', 'train.csv', '-m', 'model.h5'],
    [],
    ['-t', 'train.csv', '-w', 'random_forest'],
    ['-t', 'train.csv', '-i', '-1'],
])
def test_fatal_options(files, capsys, argv):
    argv = [str(files / a) if a.endswith(('.csv', '.h5')) else a for a in argv]
    assert run.main(argv) == 1
    assert 'Fatal' in capsys.readouterr().err


def test_dimensionality_mismatch(files, capsys):
    wide = files / 'wide.csv'
    np.savetxt(str(wide), [[0.0, 1.0]], delimiter = ',')
    code = run.main(['-t', str(files / 'train.csv'),
                     '-l', str(files / 'labels.csv'),
                     '-T', str(wide),
                     '-o', str(files / 'out.csv')])
    assert code == 1
    assert 'dimensionality' in capsys.readouterr().err


def test_missing_outputs_only_warn(files, capsys):
    code = run.main(['-t', str(files / 'train.csv'),
                     '-l', str(files / 'labels.csv')])
    assert code == 0
    out = capsys.readouterr().out
    assert 'Warning : Neither --output_model_file nor --output_file' in out


def test_ignored_options_warn(files, capsys):
    model_fp = files / 'model.h5'
    assert run.main(['-t', str(files / 'train.csv'),
                     '-l', str(files / 'labels.csv'),
                     '-M', str(model_fp)]) == 0
    capsys.readouterr()
    assert run.main(['-m', str(model_fp),
                     '-l', str(files / 'labels.csv'),
                     '-w', 'perceptron',
                     '-o', str(files / 'out.csv')]) == 0
    out = capsys.readouterr().out
    assert '--labels_file ignored' in out
    assert '--weak_learner ignored' in out
    assert '--output_file ignored' in out


def test_corrupt_model_is_fatal(files, capsys):
    model_fp = files / 'model.h5'
    model_fp.write_bytes(b'garbage')
    assert run.main(['-m', str(model_fp), '-T', str(files / 'test.csv')]) == 1
    assert 'Cannot read model file' in capsys.readouterr().err


def test_perceptron_weak_learner(files):
    model_fp = files / 'model.json'
    far = files / 'far.csv'
    out = files / 'out.csv'
    np.savetxt(str(far), [[-3.0], [3.0]], delimiter = ',')
    assert run.main(['-t', str(files / 'train.csv'),
                     '-l', str(files / 'labels.csv'),
                     '-w', 'perceptron',
                     '-s', '1',
                     '-T', str(far),
                     '-o', str(out),
                     '-M', str(model_fp)]) == 0
    assert read_predictions(out) == [5, 7]
    assert AdaBoostModel.load(str(model_fp)).weak_learner_type == PERCEPTRON
