import numpy as np
import pytest


@pytest.fixture
def separable():
    """One feature, four points of class 0 at -1 and four of class 1 at 1"""
    data = np.array([[-1.0, -1.0, -1.0, -1.0, 1.0, 1.0, 1.0, 1.0]])
    labels = np.array([0, 0, 0, 0, 1, 1, 1, 1])
    return data, labels


def make_blobs(rng, exam_no, centers, scale = 0.5):
    centers = np.asarray(centers, dtype = float)
    labels = np.arange(exam_no) % len(centers)
    data = centers[labels].T + scale * rng.randn(centers.shape[1], exam_no)
    return data, labels


@pytest.fixture
def blobs():
    """Three well separated classes in two dimensions, train and test split"""
    rng = np.random.RandomState(0)
    centers = [[0.0, 0.0], [6.0, 6.0], [12.0, 0.0]]
    train = make_blobs(rng, 60, centers)
    test = make_blobs(rng, 30, centers)
    return train, test


@pytest.fixture
def noisy():
    """Random labels, no weak learner can fit them"""
    rng = np.random.RandomState(1)
    return rng.randn(2, 60), rng.randint(0, 3, 60)
