import matplotlib.pyplot as plt


class LossHistory:
    """Training listener that keeps the average loss of every epoch."""

    def __init__(self):
        self.epochs = []
        self.losses = []

    def on_epoch_end(self, epoch, total_epochs, loss):
        self.epochs.append(epoch)
        self.losses.append(loss)

    @property
    def last_loss(self):
        return self.losses[-1] if self.losses else None

    def clear(self):
        self.epochs.clear()
        self.losses.clear()

    def plot(self, path=None):
        fig, ax = plt.subplots()
        ax.plot(self.epochs, self.losses)
        ax.set_title("Training Loss")
        ax.set_xlabel("Epoch")
        ax.set_ylabel("MSE")
        ax.grid(True)
        if path is not None:
            fig.savefig(path)
            plt.close(fig)
        else:
            plt.show()
        return fig
