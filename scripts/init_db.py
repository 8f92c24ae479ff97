"""Creates an empty reviews table file in DATA_DIR."""
import pandas as pd

from app.config import settings
from app.models.review import REVIEW_COLUMNS


settings.DATA_DIR.mkdir(parents=True, exist_ok=True)
path = settings.DATA_DIR / settings.REVIEWS_FILE


if not path.exists():
    df = pd.DataFrame(columns=REVIEW_COLUMNS)
    if path.suffix.lower() in (".xls", ".xlsx"):
        df.to_excel(path, index=False)
    else:
        df.to_csv(path, index=False)
    print(f'Created {path}')
else:
    print(f'{path} already exists')
