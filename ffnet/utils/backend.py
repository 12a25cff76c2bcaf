import torch
import random
import numpy as xp


def set_seed(seed):
    random.seed(seed)
    xp.random.seed(seed)
    torch.manual_seed(seed)
