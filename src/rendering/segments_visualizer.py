# =============================================================================
# SEGMENTS VISUALIZER - Grafico a gradini di IntensitySegments
# =============================================================================

import matplotlib.pyplot as plt
import numpy as np


class SegmentsVisualizer:
    """
    Visualizzatore della funzione di intensità.

    Genera una rappresentazione dove:
    - Asse X: coordinata
    - Asse Y: intensità
    - Gradini: un tratto orizzontale per ogni breakpoint (steps-post)
    - Prima del primo e dopo l'ultimo breakpoint: intensità 0
    """

    def __init__(self, segments, config=None):
        """
        Args:
            segments: IntensitySegments (usa solo il dump dei breakpoints)
            config: dict di configurazione (opzionale)
        """
        self.segments = segments

        default_config = {
            'figsize': (10, 4),               # pollici
            'title': 'Intensity segments',
            'title_fontsize': 12,
            'label_fontsize': 8,

            # Gradini
            'line_color': '#377eb8',          # blu
            'line_width': 1.5,
            'fill_alpha': 0.15,               # 0 = nessun riempimento
            'margin_ratio': 0.1,              # padding a zero ai lati (frazione dello span)

            # Breakpoint
            'show_breakpoints': True,
            'annotate_values': True,
            'marker_size': 4,

            # Linea dello zero
            'baseline_color': '#999999',
            'baseline_alpha': 0.6,
        }

        self.config = {**default_config, **(config or {})}

    # =========================================================================
    # PREPARAZIONE DATI
    # =========================================================================

    def _step_points(self):
        """
        Costruisce le coordinate per il disegno steps-post.

        Returns:
            tuple: (xs, ys) come np.ndarray, vuoti se non ci sono breakpoint
        """
        breakpoints = self.segments.breakpoints
        if not breakpoints:
            return np.array([]), np.array([])

        xs = np.array([x for x, _ in breakpoints], dtype=float)
        ys = np.array([v for _, v in breakpoints], dtype=float)

        span = xs[-1] - xs[0]
        margin = span * self.config['margin_ratio'] if span > 0 else 1.0

        # Zero prima del primo breakpoint, ultimo valore tenuto fino al margine
        xs = np.concatenate(([xs[0] - margin], xs, [xs[-1] + margin]))
        ys = np.concatenate(([0.0], ys, [ys[-1]]))
        return xs, ys

    # =========================================================================
    # RENDERING
    # =========================================================================

    def render(self, ax=None):
        """
        Disegna il grafico.

        Args:
            ax: Axes matplotlib esistente; None = crea una nuova figura

        Returns:
            matplotlib.figure.Figure
        """
        if ax is None:
            fig, ax = plt.subplots(figsize=self.config['figsize'])
        else:
            fig = ax.figure

        ax.set_title(self.config['title'], fontsize=self.config['title_fontsize'])

        xs, ys = self._step_points()
        if len(xs) == 0:
            ax.text(0.5, 0.5, "No segments",
                    ha='center', va='center', transform=ax.transAxes)
            ax.axis('off')
            return fig

        ax.axhline(0, color=self.config['baseline_color'],
                   alpha=self.config['baseline_alpha'], linewidth=0.8)

        ax.plot(xs, ys, color=self.config['line_color'],
                linewidth=self.config['line_width'], drawstyle='steps-post')

        if self.config['fill_alpha'] > 0:
            ax.fill_between(xs, ys, 0, step='post',
                            color=self.config['line_color'],
                            alpha=self.config['fill_alpha'])

        if self.config['show_breakpoints']:
            self._draw_breakpoints(ax)

        ax.set_xlim(xs[0], xs[-1])
        ax.set_xlabel('coordinate', fontsize=self.config['label_fontsize'])
        ax.set_ylabel('intensity', fontsize=self.config['label_fontsize'])
        return fig

    def _draw_breakpoints(self, ax):
        """Marker su ogni breakpoint, con il valore annotato se richiesto."""
        color = self.config['line_color']
        for x, value in self.segments.breakpoints:
            ax.plot(x, value, 'o', color=color,
                    markersize=self.config['marker_size'], alpha=0.9)

            if self.config['annotate_values']:
                ax.annotate(
                    f"{value}",
                    xy=(x, value),
                    xytext=(3, 4),
                    textcoords='offset points',
                    fontsize=self.config['label_fontsize'],
                    color=color,
                )

    # =========================================================================
    # DISPLAY
    # =========================================================================

    def show(self):
        """Mostra il grafico a schermo."""
        self.render()
        plt.show()
