import numpy as np
from mhboost.utility.errors import DataError


def normalize_labels(raw_labels):
    """

    Map arbitrary labels onto dense class indices 0..K-1

    Classes are numbered in order of first appearance, so the first label in
    raw_labels always becomes class 0.

    Parameters
    ----------
    raw_labels : array like
        One label per point

    Returns:
        labels : numpy int array of dense class indices
        mappings : numpy array, mappings[k] is the raw label of class k

    """
    raw_labels = np.asarray(raw_labels).ravel()
    if raw_labels.size == 0:
        raise DataError("Error : Cannot normalize an empty label vector.")

    uniq, first, inverse = np.unique(raw_labels,
                                     return_index = True,
                                     return_inverse = True)
    order = np.argsort(first, kind = 'stable')
    mappings = uniq[order]

    """Position of each sorted unique value in first appearance order"""
    rank = np.empty(order.size, dtype = np.int64)
    rank[order] = np.arange(order.size)
    labels = rank[inverse.ravel()]
    return labels, mappings


def revert_labels(labels, mappings):
    """

    Inverse of normalize_labels

    Parameters
    ----------
    labels : array like
        Dense class indices

    mappings : numpy array
        Mapping returned by normalize_labels

    Returns:
        numpy array of raw labels

    """
    labels = np.asarray(labels, dtype = np.int64).ravel()
    mappings = np.asarray(mappings)
    if labels.size and (labels.min() < 0 or labels.max() >= mappings.size):
        raise DataError("Error : Label index out of range for a mapping of "
                        "%i classes." % mappings.size)
    return mappings[labels]
