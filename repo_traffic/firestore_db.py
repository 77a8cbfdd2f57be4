#!/usr/bin/env python3
"""
Firestore traffic store for Google App Engine deployment.
"""

import logging
from datetime import datetime
from typing import List, Optional, Sequence

from google.cloud import firestore

from .models import Account, RepoRegistration, StoredDayRecords, TrafficSnapshot
from .storage import TrafficStore


def _doc_key(*parts: str) -> str:
    # Firestore document ids may not contain '/'
    return "_".join(part.replace("/", "__") for part in parts)


class FirestoreDatabaseManager(TrafficStore):
    """Handles all database operations for traffic data using Firestore."""

    def __init__(self, client: Optional[firestore.Client] = None):
        """Initialize the Firestore database manager."""
        self.db = client or firestore.Client()
        self.logger = logging.getLogger(__name__)

    def setup_database(self):
        """Initialize collections - Firestore creates them automatically."""
        self.logger.info("Firestore collections will be created automatically")

    def get_latest_snapshot(self, repo: str) -> Optional[TrafficSnapshot]:
        docs = (self.db.collection('traffic')
                .where('repo', '==', repo)
                .order_by('date', direction=firestore.Query.DESCENDING)
                .limit(1)
                .stream())
        for doc in docs:
            return TrafficSnapshot.from_row(doc.to_dict())
        return None

    def batch_get_day_records(self, repo: str, dates: Sequence[str]) -> List[StoredDayRecords]:
        collection = self.db.collection('traffic')
        refs = [collection.document(_doc_key(repo, str(d)[:10])) for d in dates]
        results = [
            StoredDayRecords.from_row(doc.to_dict())
            for doc in self.db.get_all(refs, field_paths=['date', 'views', 'clones'])
            if doc.exists
        ]
        self.logger.info(f"Read {len(results)} stored days of {len(refs)} requested for {repo}")
        return results

    def put_snapshot(self, snapshot: TrafficSnapshot):
        doc_ref = self.db.collection('traffic').document(_doc_key(snapshot.repo, snapshot.date))
        doc_ref.set(snapshot.to_row())
        self.logger.info(f"Stored traffic snapshot for {snapshot.repo} on {snapshot.date}")

    def get_account(self, username: str) -> Optional[Account]:
        doc = self.db.collection('users').document(username).get()
        if not doc.exists:
            return None
        data = doc.to_dict()
        return Account(
            username=username,
            access_token=data['access_token'],
            display_name=data.get('display_name'),
            email=data.get('email'),
            photo=data.get('photo'),
        )

    def put_account(self, account: Account):
        self.db.collection('users').document(account.username).set({
            'username': account.username,
            'access_token': account.access_token,
            'display_name': account.display_name,
            'email': account.email,
            'photo': account.photo,
        })
        self.logger.info(f"Stored account {account.username}")

    def put_registration(self, registration: RepoRegistration):
        doc_ref = self.db.collection('repos').document(_doc_key(registration.username, registration.repo))
        doc_ref.set({
            'username': registration.username,
            'repo': registration.repo,
            'added_at': datetime.utcnow().isoformat(),
        })
        self.logger.info(f"Added {registration.repo} to repos of {registration.username}")

    def get_registrations_for_user(self, username: str) -> List[RepoRegistration]:
        docs = self.db.collection('repos').where('username', '==', username).stream()
        return [RepoRegistration(username, doc.to_dict()['repo']) for doc in docs]

    def get_all_registrations(self) -> List[RepoRegistration]:
        registrations = []
        for doc in self.db.collection('repos').stream():
            data = doc.to_dict()
            registrations.append(RepoRegistration(data['username'], data['repo']))
        return registrations
