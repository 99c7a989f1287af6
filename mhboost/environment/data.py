"""
Dataset files

Files hold one example per row. HDF5 files keep the examples in the 'data'
dataset and, optionally, their labels in the 'label' dataset. Text files are
comma separated when the extension is .csv and whitespace separated otherwise.
In memory, data matrices hold one example per column.
"""

import os
import h5py
import numpy as np
from datetime import datetime
from mhboost.utility.errors import DataError

H5_EXTENSIONS = ('.h5', '.hdf5')


def _get_extension(fp):
    return os.path.splitext(str(fp))[1].lower()


def _delimiter(fp):
    if _get_extension(fp) == '.csv':
        return ','
    return None


def _has_dataset(fp, ds_name):
    if _get_extension(fp) not in H5_EXTENSIONS:
        return False
    with h5py.File(fp, 'r') as f:
        return ds_name in f


def _coerce_labels(labels):
    """Labels read as text or floats become integers when they are integral"""
    labels = np.asarray(labels).ravel()
    if labels.dtype.kind in 'US':
        for dtype in (np.int64, np.float64):
            try:
                labels = labels.astype(dtype)
                break
            except ValueError:
                continue
    if labels.dtype.kind == 'f' and labels.size and \
            np.all(np.isfinite(labels)) and np.all(labels == np.round(labels)):
        labels = labels.astype(np.int64)
    return labels


def load_data(fp, ds_name = 'data'):
    """

    Read a data matrix

    Parameters
    ----------
    fp : String
        Path to the data file

    ds_name : String, optional
        Name of the dataset for HDF5 files

    Returns:
        numpy float array with one example per column

    """
    ext = _get_extension(fp)
    try:
        if ext in H5_EXTENSIONS:
            with h5py.File(fp, 'r') as f:
                data = f[ds_name][...]
        elif ext == '.npy':
            data = np.load(fp)
        else:
            data = np.loadtxt(fp, delimiter = _delimiter(fp), ndmin = 2)
    except (OSError, KeyError, ValueError) as e:
        raise DataError("Error : Cannot load data from %s : %s" % (fp, e))
    data = np.asarray(data, dtype = np.float64)
    if data.ndim == 1:
        data = data[:, None]
    return data.T


def load_labels(fp, ds_name = 'label'):
    """

    Read one label per example, from a single row or a single column

    """
    ext = _get_extension(fp)
    try:
        if ext in H5_EXTENSIONS:
            with h5py.File(fp, 'r') as f:
                ds = f[ds_name]
                if ds.dtype.kind in 'OS':
                    labels = ds.asstr()[...].astype(str)
                else:
                    labels = ds[...]
        elif ext == '.npy':
            labels = np.load(fp)
        else:
            labels = np.loadtxt(fp, dtype = str, delimiter = _delimiter(fp),
                                ndmin = 1)
    except (OSError, KeyError, ValueError) as e:
        raise DataError("Error : Cannot load labels from %s : %s" % (fp, e))
    return _coerce_labels(labels)


def split_labels(data):
    """
    Use the last dimension of data as labels

    Returns:
        data without its last row and the labels
    """
    if data.shape[0] < 2:
        raise DataError("Error : Need at least two dimensions to take the "
                        "labels from the last one.")
    return data[:-1, :], _coerce_labels(data[-1, :])


def load_training(fp, labels_fp = None, logEN = True):
    """

    Read training data and labels

    Labels are taken from labels_fp when given, from the 'label' dataset of
    an HDF5 training file if present, and from the last dimension otherwise.

    """
    data = load_data(fp)
    if labels_fp is not None:
        labels = load_labels(labels_fp)
    else:
        if _has_dataset(fp, 'label'):
            labels = load_labels(fp)
        else:
            if logEN:
                msg = "Info : Using the last dimension of training set as labels."
                print(datetime.now(), msg)
            data, labels = split_labels(data)
    if labels.size != data.shape[1]:
        raise DataError("Error : %i labels given for %i training examples."
                        % (labels.size, data.shape[1]))
    return data, labels


def save_labels(fp, labels):
    """
    Write one label per line, or a 'label' dataset for HDF5 files
    """
    labels = np.asarray(labels).ravel()
    ext = _get_extension(fp)
    if ext in H5_EXTENSIONS:
        with h5py.File(fp, 'w') as f:
            if labels.dtype.kind in 'OUS':
                f.create_dataset('label',
                                 data = labels.astype(object),
                                 dtype = h5py.string_dtype())
            else:
                f.create_dataset('label', data = labels)
    elif ext == '.npy':
        np.save(fp, labels)
    else:
        np.savetxt(fp, labels, fmt = '%s')
